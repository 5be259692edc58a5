"""
Exception types shared across the package.
"""


class CinefileError(Exception):
    """Base class for all package errors."""


class RecordDecodeError(CinefileError):
    """A stored record could not be decoded as JSON."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Record '{key}' is not valid JSON: {reason}")
        self.key = key
        self.reason = reason


class ValidationError(CinefileError, ValueError):
    """Input rejected before any persistence attempt."""


class ReviewValidationError(ValidationError):
    """Review text, rating value or intimacy tag is not acceptable."""


class CredentialsValidationError(ValidationError):
    """E-mail or password failed the sign-in form checks."""


class AuthError(CinefileError):
    """The authentication backend rejected an operation."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
