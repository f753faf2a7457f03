"""API request and response schemas."""

from loginapp.presentation.api.schemas.auth import (
    ForgotPasswordRequest,
    HealthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    ResetPasswordRequest,
    SessionData,
    UserResponse,
)

__all__ = [
    "ForgotPasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProfileResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
    "SessionData",
    "UserResponse",
]
