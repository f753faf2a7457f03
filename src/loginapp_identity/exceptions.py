"""Identity exceptions.

Reset token failures share one message so callers cannot tell a wrong,
replayed or superseded token apart from an expired one. The two types stay
distinct for logging and tests.
"""

from loginapp_auth.exceptions import AuthError


class ResetTokenInvalidError(AuthError):
    """Raised when no live reset token matches the presented value."""

    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message)


class ResetTokenExpiredError(ResetTokenInvalidError):
    """Raised when the reset token matched but its expiry has passed."""

    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message)
