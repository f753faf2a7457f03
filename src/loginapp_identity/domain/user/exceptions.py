"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from loginapp_auth.exceptions import AuthError


class InvalidEmailError(ValueError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EmailAlreadyExistsError(AuthError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email is already registered")


class InvalidResetTokenTransitionError(Exception):
    """A reset token was asked to move to a state it cannot reach."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move reset token from {current} to {target}")
