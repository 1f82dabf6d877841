"""
Typed failures raised by the content service.

Every expected, caller-recoverable condition is one of four kinds.  The API
surface maps a kind to its HTTP status through ``ContentError.status_code``;
anything that is not a ``ContentError`` (driver errors, lost connections)
propagates unchanged.
"""
import enum


class ErrorKind(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONSTRAINT_VIOLATION = "constraint_violation"


class ContentError(Exception):
    kind: ErrorKind
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ContentError):
    kind = ErrorKind.UNAUTHENTICATED
    status_code = 401
    default_message = "Authentication required"


class NotFound(ContentError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    default_message = "Resource not found"


class Forbidden(ContentError):
    kind = ErrorKind.FORBIDDEN
    status_code = 403
    default_message = "You do not own this resource"


class ConstraintViolation(ContentError):
    kind = ErrorKind.CONSTRAINT_VIOLATION
    status_code = 409
    default_message = "A uniqueness constraint was violated"
