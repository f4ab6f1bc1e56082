class DomainError(Exception):
    """Base exception for business rule violations."""


class AuthError(DomainError):
    """Raised when nobody is signed in or credentials are rejected."""


class NotFoundError(DomainError):
    """Raised when a required document (profile, role) does not exist."""


class ValidationError(DomainError):
    """Raised when input data is invalid, before any remote call is made."""


class ReadError(DomainError):
    """Raised when a backend read failed."""


class WriteError(DomainError):
    """Raised when a backend write failed."""


class LogicRejection(DomainError):
    """Business-rule refusal, e.g. duplicate check-in or unknown session code."""


class StoreError(Exception):
    """Transport-level failure reported by a document store backend.

    The message is human readable and gets surfaced to the user prefixed by
    the stage that failed.
    """
