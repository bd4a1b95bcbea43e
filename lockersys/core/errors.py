from __future__ import annotations


class LockerSysError(Exception):
    """Base class for errors surfaced to API clients as `{success: false, message}`."""


class ValidationError(LockerSysError):
    """Raised when a required field is missing or a reference is invalid."""


class AuthError(LockerSysError):
    """Raised on bad credentials or a missing/invalid bearer token."""


class ConflictError(LockerSysError):
    """Raised when a write would break a uniqueness rule or the locker/rental invariant."""


class NotFoundError(LockerSysError):
    """Raised when an id does not reference an existing record."""


class StorageError(LockerSysError):
    """Raised when the underlying store fails; the unit of work is already rolled back."""


# Mapping of domain errors to HTTP status codes
ERROR_STATUS_CODES: dict[type[LockerSysError], int] = {
    ValidationError: 400,
    AuthError: 401,
    NotFoundError: 404,
    ConflictError: 409,
    StorageError: 500,
}


def status_code_for(error: LockerSysError) -> int:
    for error_type in type(error).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return 500
