from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class AuthenticationError(UserError):
    """Raised when a protected operation is called without a live token.

    Missing, unknown and expired tokens all produce the same message.
    """

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidCredentialError(UserError):
    """Raised when a PIN does not match the configured secret."""

    def __init__(self, message: str = "Invalid PIN") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidFormatError(ValidationError):
    """Raised when a PIN is not exactly 4 numeric characters."""

    def __init__(self, message: str = "PIN must be exactly 4 digits") -> None:
        super().__init__(message)


class RateLimitError(UserError):
    """Raised when an address has used up its attempt quota."""

    def __init__(self, message: str = "Too many attempts. Please try again later.", retry_after: int | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after
