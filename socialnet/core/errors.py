import functools
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from socialnet.core.result import ErrorKind, Result

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SELF_REFERENCE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.COMMENTS_DISABLED: status.HTTP_403_FORBIDDEN,
}


class StoreError(Exception):
    """Unexpected persistence fault surfaced to the API as an internal error."""


def store_errors(action: str):
    """Roll back and wrap any SQLAlchemy fault raised while ``action`` runs.

    The wrapped function must take the session as its first argument.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(db: Session, *args, **kwargs):
            try:
                return func(db, *args, **kwargs)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Database error while {action}: {str(e)}")
                raise StoreError(f"Error {action}") from e

        return wrapper

    return decorator


def is_unique_violation(exc: IntegrityError, constraint: str) -> bool:
    """True when ``exc`` was raised by the unique constraint named ``constraint``.

    PostgreSQL names the constraint in its message. SQLite only says which
    kind of constraint failed.
    """
    message = str(exc.orig)
    return constraint in message or "UNIQUE constraint failed" in message


def unwrap(result: Result):
    """Return the data of a successful result or raise the matching HTTP error."""
    if result.success:
        return result.data
    raise HTTPException(
        status_code=STATUS_BY_ERROR.get(result.error, status.HTTP_400_BAD_REQUEST),
        detail=result.message,
    )
