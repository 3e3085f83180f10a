"""Domain layer errors.

Every failure a caller can observe is one of the classes below. Only
``NetworkError`` is worth retrying; the rest are terminal for the call.
"""

from enum import Enum


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input, rejected before any network call."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class AuthFailure(str, Enum):
    """Why an authentication operation failed."""

    INVALID_CODE = "invalid_code"
    EXPIRED_CODE = "expired_code"
    SEND_FAILED = "send_failed"
    NO_PENDING_OTP = "no_pending_otp"
    NOT_AUTHENTICATED = "not_authenticated"
    SESSION_SUPERSEDED = "session_superseded"
    RESEND_TOO_SOON = "resend_too_soon"
    ALREADY_AUTHENTICATED = "already_authenticated"


class AuthError(DomainError):
    """OTP rejected, or an operation attempted without a usable session."""

    def __init__(self, reason: AuthFailure, detail: str | None = None):
        self.reason = reason
        self.detail = detail
        message = reason.value if not detail else f"{reason.value}: {detail}"
        super().__init__(message)


class ConflictError(DomainError):
    """A uniqueness rule prevented the operation."""

    USERNAME_TAKEN = "username_taken"
    COURSE_DEDUP_EXHAUSTED = "course_dedup_exhausted"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class NetworkError(DomainError):
    """Transport failure or timeout. Retryable by the caller."""

    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    UNAVAILABLE = "unavailable"

    def __init__(self, reason: str, detail: str | None = None):
        self.reason = reason
        self.detail = detail
        message = reason if not detail else f"{reason}: {detail}"
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateRowError(DomainError):
    """Raised by a gateway when an insert violates a uniqueness constraint.

    ``columns`` names the violated key when the backend reports it.
    Services translate this into ``ConflictError`` or a re-query.
    """

    def __init__(self, table: str, columns: tuple[str, ...] = ()):
        self.table = table
        self.columns = columns
        key = ", ".join(columns) if columns else "unknown key"
        super().__init__(f"Duplicate row in {table} ({key})")


class BackendError(DomainError):
    """The backend refused a request (permission, missing function, bad input).

    Not retryable as-is. Services treat it like any other backend failure:
    fail-safe paths still sign out or keep already-written rows.
    """

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Backend rejected request ({status_code}): {detail}")
