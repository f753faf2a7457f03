"""Login App Identity - users, credentials and password reset.

This package handles the identity side of the credential lifecycle:
- User aggregate and its repository (registration, lookup)
- Password reset tokens (issue, validate, consume once)
- Credential orchestration (register, login, forgot/reset password)
- Reset link delivery through a notifier port

Hashing, password policy and session tokens live in loginapp_auth.
"""

from loginapp_identity.application.ports import Notifier
from loginapp_identity.application.services import (
    CredentialService,
    ResetTokenStore,
)
from loginapp_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidResetTokenTransitionError,
    ResetTokenState,
    User,
    UserRepository,
)
from loginapp_identity.exceptions import ResetTokenExpiredError, ResetTokenInvalidError
from loginapp_identity.schemas import (
    IssuedResetToken,
    PublicUser,
    ServiceResponse,
    SessionGrant,
)

__all__ = [
    # Application
    "CredentialService",
    "Notifier",
    "ResetTokenStore",
    # Domain - User
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidResetTokenTransitionError",
    "ResetTokenState",
    "User",
    "UserRepository",
    # Exceptions
    "ResetTokenExpiredError",
    "ResetTokenInvalidError",
    # Schemas
    "IssuedResetToken",
    "PublicUser",
    "ServiceResponse",
    "SessionGrant",
]
