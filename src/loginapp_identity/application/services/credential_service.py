"""Credential service for registration, login and password reset."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING

from loginapp_auth import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    PasswordPolicy,
    ServiceFailureError,
    TokenPayload,
    ValidationError,
)
from loginapp_auth.time import utc_now
from loginapp_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    User,
)
from loginapp_identity.schemas import PublicUser, ServiceResponse, SessionGrant

if TYPE_CHECKING:
    from loginapp_identity.application.ports import Notifier
    from loginapp_identity.application.services.reset_token_store import (
        ResetTokenStore,
    )
    from loginapp_identity.domain.user import UserRepository

logger = logging.getLogger(__name__)

REGISTRATION_SUCCEEDED = "Registration successful"
LOGIN_SUCCEEDED = "Login successful"
RESET_LINK_ACKNOWLEDGED = (
    "If your email is registered, you will receive a password reset link"
)
PASSWORD_RESET_SUCCEEDED = (
    "Password has been reset successfully. You can now login with your new password."
)

REGISTRATION_FAILED = "Registration failed. Please try again."
LOGIN_FAILED = "Login failed. Please try again."
RESET_REQUEST_FAILED = "Failed to process request. Please try again."
PASSWORD_RESET_FAILED = "Failed to reset password. Please try again."
PROFILE_FAILED = "Failed to load profile. Please try again."


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@contextmanager
def _service_boundary(operation: str, failure_message: str) -> Iterator[None]:
    """Let typed auth errors through; turn anything else into a generic failure."""
    try:
        yield
    except AuthError:
        raise
    except Exception as e:
        logger.exception("%s failed unexpectedly", operation)
        raise ServiceFailureError(failure_message) from e


class CredentialService:
    """
    Application service for the credential lifecycle.

    Orchestrates the loginapp_auth primitives (password hashing, password
    policy, session tokens) with the User aggregate, its repository, the
    reset token store and the notifier to provide:
    - Registration
    - Login with optional "remember me"
    - Forgot password (reset link delivery)
    - Password reset with a single-use token
    - Session token verification for protected routes

    Failures are raised as ``AuthError`` subclasses with fixed messages.
    Unknown email and wrong password are indistinguishable, and
    ``forgot_password`` answers the same way whether or not the email exists.
    """

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        password_policy: PasswordPolicy,
        jwt_service: JWTService,
        reset_token_store: ResetTokenStore,
        notifier: Notifier,
        frontend_base_url: str,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._password_policy = password_policy
        self._jwt_service = jwt_service
        self._reset_tokens = reset_token_store
        self._notifier = notifier
        self._frontend_base_url = frontend_base_url.rstrip("/")
        self._clock = clock

    def _grant(self, user: User, remember_me: bool) -> SessionGrant:
        token = self._jwt_service.issue(
            user.persisted_id,
            user.email,
            extended_lifetime=remember_me,
        )
        lifetime = self._jwt_service.lifetime_for(remember_me)
        return SessionGrant(
            token=token,
            user=PublicUser.from_user(user),
            expires_in=int(lifetime.total_seconds()),
        )

    def _reset_link(self, raw_token: str) -> str:
        return f"{self._frontend_base_url}/reset-password/{raw_token}"

    async def register(  # noqa: PLR0913
        self,
        email: str | None,
        name: str | None,
        phone: str | None,
        password: str | None,
        confirm_password: str | None,
    ) -> ServiceResponse:
        with _service_boundary("Registration", REGISTRATION_FAILED):
            if (
                email is None
                or name is None
                or password is None
                or any(_is_blank(v) for v in (email, name, password, confirm_password))
            ):
                msg = "All required fields must be filled"
                raise ValidationError(msg)

            try:
                email_obj = Email(email)
            except InvalidEmailError as e:
                msg = "Please enter a valid email address"
                raise ValidationError(msg) from e

            if password != confirm_password:
                msg = "Passwords do not match"
                raise ValidationError(msg)

            self._password_policy.validate(password)

            if await self._user_repo.find_by_email(email_obj) is not None:
                raise EmailAlreadyExistsError(email_obj.value)

            password_hash = self._password_service.hash(password)
            user = User.create(
                email=email_obj,
                name=name.strip(),
                password_hash=password_hash,
                phone=phone.strip() if phone and phone.strip() else None,
            )
            user.assign_id(await self._user_repo.insert(user))

            logger.info("User registered: %s", user.id)
            return ServiceResponse.ok(
                REGISTRATION_SUCCEEDED,
                self._grant(user, remember_me=False),
            )

    async def login(
        self,
        email: str | None,
        password: str | None,
        remember_me: bool = False,
    ) -> ServiceResponse:
        with _service_boundary("Login", LOGIN_FAILED):
            if email is None or _is_blank(email) or not password:
                msg = "Email and password are required"
                raise ValidationError(msg)

            try:
                email_obj = Email(email)
            except InvalidEmailError:
                self._password_service.dummy_verify(password)
                raise InvalidCredentialsError from None

            user = await self._user_repo.find_by_email(email_obj)
            if user is None:
                # Same bcrypt cost as a wrong password
                self._password_service.dummy_verify(password)
                raise InvalidCredentialsError

            if not self._password_service.verify(password, user.password_hash):
                raise InvalidCredentialsError

            if self._password_service.needs_rehash(user.password_hash):
                new_hash = self._password_service.hash(password)
                await self._user_repo.update_password(user.persisted_id, new_hash)
                user.change_password_hash(new_hash)
                logger.info("Upgraded password hash for user: %s", user.id)

            logger.info("User logged in: %s", user.id)
            return ServiceResponse.ok(LOGIN_SUCCEEDED, self._grant(user, remember_me))

    async def forgot_password(self, email: str | None) -> ServiceResponse:
        if email is None or _is_blank(email):
            msg = "Email is required"
            raise ValidationError(msg)

        acknowledged = ServiceResponse.ok(RESET_LINK_ACKNOWLEDGED)

        with _service_boundary("Password reset request", RESET_REQUEST_FAILED):
            try:
                email_obj = Email(email)
            except InvalidEmailError:
                return acknowledged

            user = await self._user_repo.find_by_email(email_obj)
            if user is None:
                logger.debug("Password reset requested for unknown email")
                return acknowledged

            issued = await self._reset_tokens.issue_for(user, self._clock())

            try:
                self._notifier.send_password_reset(
                    user.email,
                    self._reset_link(issued.token),
                    user.name,
                )
                logger.info("Password reset email sent for user: %s", user.id)
            except Exception as e:
                # The token stays valid; the user can simply ask again
                logger.error(
                    "Failed to send password reset email for user %s: %s",
                    user.id,
                    type(e).__name__,
                )

            return acknowledged

    async def reset_password(
        self,
        token: str | None,
        password: str | None,
        confirm_password: str | None,
    ) -> ServiceResponse:
        with _service_boundary("Password reset", PASSWORD_RESET_FAILED):
            missing = "All fields are required"
            if token is None or _is_blank(token):
                raise ValidationError(missing)
            if not password or not confirm_password:
                raise ValidationError(missing)

            if password != confirm_password:
                msg = "Passwords do not match"
                raise ValidationError(msg)

            self._password_policy.validate(password)

            now = self._clock()
            # Reject unknown tokens before paying for bcrypt
            await self._reset_tokens.validate(token, now)
            new_hash = self._password_service.hash(password)
            user = await self._reset_tokens.consume(token, new_hash, now)

            logger.info("Password reset completed for user: %s", user.id)
            return ServiceResponse.ok(PASSWORD_RESET_SUCCEEDED)

    def authenticate(self, token: str) -> TokenPayload:
        return self._jwt_service.verify(token)

    async def get_profile(self, user_id: int) -> PublicUser:
        with _service_boundary("Profile lookup", PROFILE_FAILED):
            user = await self._user_repo.find_by_id(user_id)
            if user is None:
                msg = "User not found"
                raise InvalidTokenError(msg)
            return PublicUser.from_user(user)
