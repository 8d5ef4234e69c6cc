from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    SELF_REFERENCE = "self_reference"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    COMMENTS_DISABLED = "comments_disabled"


@dataclass
class Result:
    """Outcome of a mutating operation.

    Business-rule failures travel back to the caller as a failed Result
    instead of an exception; ``data`` carries the entity snapshot on success.
    """

    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Any) -> "Result":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> "Result":
        return cls(success=False, error=error, message=message)

    def as_dict(self) -> dict:
        if self.success:
            data = self.data.model_dump() if hasattr(self.data, "model_dump") else self.data
            return {"success": True, "data": data}
        return {"success": False, "message": self.message}
