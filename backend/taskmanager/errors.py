"""Error taxonomy shared by the service layer and the HTTP transport.

AppError          → generic failure carrying the intended HTTP status code
ValidationError   → caller-supplied task data violates an invariant (400)
NotFoundError     → referenced identifier does not exist (404)
"""

from __future__ import annotations

from http import HTTPStatus


class AppError(Exception):
    """Application-level failure with an HTTP status code attached."""

    def __init__(self, code: int, message: str, field: str = "") -> None:
        self.code = int(code)
        self.message = message
        self.field = field
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message

    @classmethod
    def bad_request(cls, message: str) -> AppError:
        return cls(HTTPStatus.BAD_REQUEST, message)

    @classmethod
    def internal(cls, message: str) -> AppError:
        return cls(HTTPStatus.INTERNAL_SERVER_ERROR, message)


class ValidationError(AppError):
    """Raised when a task field fails validation. Always names the field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(HTTPStatus.BAD_REQUEST, message, field=field)


class NotFoundError(AppError):
    """Raised when no resource exists for the requested identifier."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(HTTPStatus.NOT_FOUND, f"{resource} not found")
