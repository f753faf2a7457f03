"""User domain manages identity and credential state.

This domain handles:
- User aggregate (id, email, name, phone, password digest, reset token)
- The password reset token lifecycle
- The repository contract used by the application services
"""

from loginapp_identity.domain.user.aggregates import User
from loginapp_identity.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidResetTokenTransitionError,
)
from loginapp_identity.domain.user.repositories import UserRepository
from loginapp_identity.domain.user.value_objects import (
    Email,
    ResetTokenState,
)

__all__ = [
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidResetTokenTransitionError",
    "ResetTokenState",
    "User",
    "UserRepository",
]
