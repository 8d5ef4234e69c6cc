import logging
import psycopg2
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from socialnet.core.config import (
    SQLALCHEMY_DATABASE_URL,
    DB_NAME,
    DB_USER,
    DB_PASS,
    DB_HOST,
    DB_STATEMENT_TIMEOUT_MS,
)
from socialnet.db.base import Base

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    # SQLite needs check_same_thread disabled for the threaded dev server
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {"options": f"-c statement_timeout={DB_STATEMENT_TIMEOUT_MS}"}


# Setup SQLAlchemy engine
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=_connect_args(SQLALCHEMY_DATABASE_URL),
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def ensure_database():
    """Try to create the PostgreSQL database if it doesn't exist."""
    if not SQLALCHEMY_DATABASE_URL.startswith("postgresql") or not DB_NAME:
        return
    try:
        conn = psycopg2.connect(dbname="postgres", user=DB_USER, password=DB_PASS, host=DB_HOST)
        conn.autocommit = True
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE {DB_NAME}")
        cur.close()
        conn.close()
        logger.info(f"Created database {DB_NAME}")
    except psycopg2.errors.DuplicateDatabase:
        pass
    except psycopg2.Error as e:
        logger.warning(f"Could not create database {DB_NAME}: {e}")


def init_db():
    # Register every table on Base.metadata before creating them
    import socialnet.db.models  # noqa: F401

    ensure_database()
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
