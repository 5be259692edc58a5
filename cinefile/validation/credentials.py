"""
Sign-in and sign-up form checks.
"""

from cinefile.errors import CredentialsValidationError

MIN_PASSWORD_LENGTH = 6


def validate_credentials(email: str, password: str) -> None:
    """
    Check an e-mail/password pair before it reaches a session store.

    Raises:
        CredentialsValidationError: With a message suitable for display
    """
    if not email or not password:
        raise CredentialsValidationError("Please fill in all fields")
    if "@" not in email:
        raise CredentialsValidationError("Please enter a valid email address")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise CredentialsValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
