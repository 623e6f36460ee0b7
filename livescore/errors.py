from typing import Optional


class APIError(Exception):
    """Unified error class for all external HTTP clients."""

    def __init__(self, source: str, code: str, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.code = code
        self.message = message
        self.details = details

    @property
    def status_code(self) -> Optional[int]:
        try:
            return int(self.code)
        except (TypeError, ValueError):
            return None

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "code": self.code,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }


class DatabaseError(Exception):
    """Raised when the database driver reports a failure."""


class ValidationError(ValueError):
    """Raised when an admin payload does not pass validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"message": self.message, **({"field": self.field} if self.field else {})}
