"""Error Hierarchy — typed exceptions and the exception → HTTP status mapping.

Invariants:
    - Status and category are decided by map_exception from the exception type
      alone; exceptions carry only their message
    - map_exception is pure: the same exception type always yields the same mapping
    - Fixed messages for unauthorized/not-implemented/timeout/internal kinds —
      exception text is only surfaced for argument and operation errors
    - "User not found" and "duplicate email" are repository outcomes, not raised errors;
      DuplicateEmailError exists for callers that need to escalate one

Design Decisions:
    - Builtins participate in the mapping (ValueError, PermissionError,
      NotImplementedError, TimeoutError) so library code needs no wrapping
    - Mapping table is ordered: subclasses listed before their bases
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Error kinds recognized by the error handling stage."""
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_OPERATION = "invalid_operation"
    DUPLICATE_EMAIL = "duplicate_email"
    UNAUTHORIZED = "unauthorized"
    NOT_IMPLEMENTED = "not_implemented"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


class RegistryError(Exception):
    """Base exception for all user registry errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(RegistryError):
    """Malformed or missing required input."""


class InvalidOperationError(RegistryError):
    """Business-rule violation."""


class DuplicateEmailError(InvalidOperationError):
    """Another user already holds this normalized email."""
    def __init__(self, email: str):
        super().__init__(f"A user with email '{email}' already exists.")
        self.email = email


class UnauthorizedError(RegistryError):
    """Missing or invalid credential."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


# ─── Exception → response mapping ───────────────────────────────

@dataclass(frozen=True)
class ErrorMapping:
    """Wire-level translation of one exception kind."""
    status_code: int
    error: str
    message: str
    category: ErrorCategory

    @property
    def is_internal(self) -> bool:
        return self.category is ErrorCategory.INTERNAL


INTERNAL_ERROR = ErrorMapping(
    500,
    "Internal server error",
    "An unexpected error occurred while processing your request",
    ErrorCategory.INTERNAL,
)

# (exception types, status, error, fixed message or None to use str(exc), category)
_MAPPING_TABLE: tuple[tuple[tuple[type[BaseException], ...], int, str, str | None, ErrorCategory], ...] = (
    ((DuplicateEmailError,), 409, "Duplicate email", None, ErrorCategory.DUPLICATE_EMAIL),
    ((InvalidArgumentError, ValueError), 400, "Invalid request parameters", None,
     ErrorCategory.INVALID_ARGUMENT),
    ((InvalidOperationError,), 400, "Invalid operation", None, ErrorCategory.INVALID_OPERATION),
    ((UnauthorizedError, PermissionError), 401, "Unauthorized access",
     "Authentication required or invalid credentials", ErrorCategory.UNAUTHORIZED),
    ((NotImplementedError,), 501, "Feature not implemented",
     "This feature is not yet implemented", ErrorCategory.NOT_IMPLEMENTED),
    ((TimeoutError,), 408, "Request timeout",
     "The request took too long to process", ErrorCategory.TIMEOUT),
)


def map_exception(exc: BaseException) -> ErrorMapping:
    """Map an exception to status code, short category and user-facing message."""
    for types, status_code, error, fixed_message, category in _MAPPING_TABLE:
        if isinstance(exc, types):
            message = fixed_message or _exception_message(exc)
            return ErrorMapping(status_code, error, message, category)
    return INTERNAL_ERROR


def _exception_message(exc: BaseException) -> str:
    if isinstance(exc, RegistryError):
        return exc.message
    return str(exc) or type(exc).__name__
