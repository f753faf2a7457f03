"""Authentication exceptions.

These exceptions are raised by the loginapp_auth and loginapp_identity
packages. Each carries a fixed, user-safe ``message``; the API layer maps
the exception type to a status code and returns the message verbatim.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Raised when required input is missing or malformed."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet the password policy."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login.

    Unknown email and wrong password deliberately share this type and message.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a session token is malformed or its signature is invalid."""

    def __init__(self, message: str = "Invalid token."):
        super().__init__(message)


class TokenExpiredError(AuthError):
    """Raised when a session token has a valid signature but is past its expiry."""

    def __init__(self, message: str = "Token expired. Please login again."):
        super().__init__(message)


class HashingError(AuthError):
    """Raised when a password digest cannot be produced."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message)


class ServiceFailureError(AuthError):
    """Raised when an unexpected lower-layer failure aborts an operation."""

    def __init__(self, message: str = "Request failed. Please try again."):
        super().__init__(message)
