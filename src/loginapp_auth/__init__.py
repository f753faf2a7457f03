"""Login App Auth - Generic authentication primitives.

This package is independent of the user model and of any persistence
technology. It handles:
- Password hashing (bcrypt)
- Password policy validation
- Session token (JWT) issuance and verification

Architecture:
    loginapp_auth/
    ├── services/           # Pure logic (password hashing, policy, JWT)
    ├── schemas.py          # Data classes
    ├── time.py             # UTC clock helpers
    └── exceptions.py       # Auth exceptions

Usage:
    from loginapp_auth import PasswordHashingService, JWTService
"""

from loginapp_auth.exceptions import (
    AuthError,
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    ServiceFailureError,
    TokenExpiredError,
    ValidationError,
    WeakPasswordError,
)
from loginapp_auth.schemas import TokenPayload
from loginapp_auth.services import JWTService, PasswordHashingService, PasswordPolicy

__all__ = [
    # Services
    "JWTService",
    "PasswordHashingService",
    "PasswordPolicy",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "HashingError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "ServiceFailureError",
    "TokenExpiredError",
    "ValidationError",
    "WeakPasswordError",
]
