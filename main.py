import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from socialnet.api.v1 import auth, user
from socialnet.core.errors import StoreError
from socialnet.core.logging import configure_logging
from socialnet.db.session import engine, init_db
from socialnet.routers import post
from socialnet.routers import like
from socialnet.routers import comment

configure_logging()
logger = logging.getLogger("socialnet")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield
    engine.dispose()


app = FastAPI(title="socialnet", lifespan=lifespan)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse({"detail": "Internal server error"}, status_code=500)


app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(user.router, prefix="/api/users", tags=["Users"])
app.include_router(post.router, prefix="/api/posts", tags=["Posts"])
app.include_router(like.router, prefix="/api/likes", tags=["Likes"])
app.include_router(comment.router, prefix="/api/comments", tags=["Comments"])
