"""Authentication router for registration, login and password reset."""

import logging

from fastapi import APIRouter, status

from loginapp.presentation.api.dependencies import (
    CredentialServiceDep,
    CurrentPrincipal,
    DBSession,
)
from loginapp.presentation.api.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Missing fields, mismatched or weak password"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    service: CredentialServiceDep,
    session: DBSession,
) -> MessageResponse:
    """
    Register a new user account.

    Returns a session token so the user is logged in right away.
    """
    try:
        result = await service.register(
            email=request.email,
            name=request.name,
            phone=request.phone,
            password=request.password,
            confirm_password=request.confirm_password,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse.from_service(result)


@router.post(
    "/login",
    summary="Login with email and password",
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Email or password missing"},
        401: {"description": "Invalid email or password"},
    },
)
async def login(
    request: LoginRequest,
    service: CredentialServiceDep,
    session: DBSession,
) -> MessageResponse:
    """
    Authenticate and receive a session token.

    ``rememberMe`` extends the token lifetime from 7 to 30 days.
    """
    try:
        result = await service.login(
            email=request.email,
            password=request.password,
            remember_me=request.remember_me,
        )
        # Persists a rehashed password, if any
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse.from_service(result)


@router.post(
    "/forgot-password",
    summary="Request a password reset link",
    responses={
        200: {"description": "Acknowledged (whether or not the email exists)"},
        400: {"description": "Email missing"},
    },
)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: CredentialServiceDep,
    session: DBSession,
) -> MessageResponse:
    """Send a reset link if the email belongs to an account."""
    try:
        result = await service.forgot_password(request.email)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse.from_service(result)


@router.post(
    "/reset-password",
    summary="Set a new password with a reset token",
    responses={
        200: {"description": "Password reset"},
        400: {"description": "Invalid input or invalid/expired token"},
    },
)
async def reset_password(
    request: ResetPasswordRequest,
    service: CredentialServiceDep,
    session: DBSession,
) -> MessageResponse:
    """Consume a reset token and replace the password."""
    try:
        result = await service.reset_password(
            token=request.token,
            password=request.password,
            confirm_password=request.confirm_password,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse.from_service(result)


@router.get(
    "/me",
    summary="Get the current user",
    responses={
        200: {"description": "Current user"},
        401: {"description": "Missing, invalid or expired token"},
    },
)
async def me(
    principal: CurrentPrincipal,
    service: CredentialServiceDep,
) -> ProfileResponse:
    """Return the profile of the user the bearer token was issued to."""
    user = await service.get_profile(principal.user_id)
    return ProfileResponse(user=UserResponse.from_public_user(user))
