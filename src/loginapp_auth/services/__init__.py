"""Authentication services.

Provides password hashing, password policy and session token management.
"""

from loginapp_auth.services.jwt_service import JWTService
from loginapp_auth.services.password_policy import PasswordPolicy
from loginapp_auth.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
    "PasswordPolicy",
]
