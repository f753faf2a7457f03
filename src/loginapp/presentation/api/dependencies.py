"""FastAPI dependency injection for the Login App API.

Provides dependencies for:
- Database engine and sessions
- Service instances built from settings
- Authentication (current principal from the bearer token)
"""

import logging
from datetime import timedelta
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)

from loginapp.presentation.api.config import get_api_settings
from loginapp_auth import (
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    PasswordPolicy,
    TokenPayload,
)
from loginapp_config.settings import Settings
from loginapp_identity.application.ports import Notifier
from loginapp_identity.application.services import CredentialService, ResetTokenStore
from loginapp_identity.infrastructure.email import SMTPEmailNotifier
from loginapp_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
    create_engine_from_url,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

NO_TOKEN_MESSAGE = "Access denied. No token provided."

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session
# -----------------------------------------------------------------------------


def create_engine_for(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for an application instance.

    The engine manages the connection pool and is shared by all requests
    of that application; ``create_app`` stores it on ``app.state``.
    """
    return create_engine_from_url(settings.database_url, pool_pre_ping=True)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Yields
    ------
    AsyncSession bound to the application's engine. The router commits;
    anything left uncommitted is rolled back when the session closes.
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        session_expire_days=settings.jwt_session_expire_days,
        remember_me_expire_days=settings.jwt_remember_me_expire_days,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_password_policy(settings: SettingsDep) -> PasswordPolicy:
    return PasswordPolicy(
        min_length=settings.password_min_length,
        require_mixed_case=settings.password_require_mixed_case,
        require_digit=settings.password_require_digit,
    )


def get_notifier(settings: SettingsDep) -> Notifier:
    return SMTPEmailNotifier(settings)


async def get_credential_service(  # noqa: PLR0913
    session: DBSession,
    settings: SettingsDep,
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    password_service: Annotated[PasswordHashingService, Depends(get_password_service)],
    password_policy: Annotated[PasswordPolicy, Depends(get_password_policy)],
    notifier: Annotated[Notifier, Depends(get_notifier)],
) -> CredentialService:
    """
    Get the credential service with all dependencies.

    Built per request around the request's database session.
    """
    user_repo = UserRepositorySQLAlchemy(session)
    reset_token_store = ResetTokenStore(
        user_repo,
        ttl=timedelta(minutes=settings.reset_token_expire_minutes),
    )

    return CredentialService(
        user_repository=user_repo,
        password_service=password_service,
        password_policy=password_policy,
        jwt_service=jwt_service,
        reset_token_store=reset_token_store,
        notifier=notifier,
        frontend_base_url=settings.frontend_base_url,
    )


# Type alias for injected credential service
CredentialServiceDep = Annotated[CredentialService, Depends(get_credential_service)]


# -----------------------------------------------------------------------------
# Current Principal (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> TokenPayload:
    """
    Verify the bearer token and return its payload.

    Raises
    ------
    InvalidTokenError
        If no token was sent or its signature does not verify
    TokenExpiredError
        If the token is past its expiry
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError(NO_TOKEN_MESSAGE)

    return jwt_service.verify(credentials.credentials)


# Type alias for injected principal
CurrentPrincipal = Annotated[TokenPayload, Depends(get_current_principal)]

