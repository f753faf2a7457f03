"""SQLAlchemy implementation of UserRepository."""

import logging
from datetime import datetime
from typing import Union

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from loginapp_auth.time import utc_now
from loginapp_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    User,
    UserRepository,
)
from loginapp_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Writes are flushed, never committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> User | None:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = (
            select(UserModel)
            .where(UserModel.email == email_value)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def insert(self, user: User) -> int:
        model = self._map_to_model(user)
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(user.email) from e
            raise

        logger.info("Created user: %s", model.id)
        return model.id

    async def update_password(self, user_id: int, password_hash: str) -> None:
        model = await self._require_model(user_id)
        model.password_hash = password_hash
        await self._session.flush()
        logger.debug("Updated password for user: %s", user_id)

    async def set_reset_token(
        self,
        user_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> None:
        model = await self._require_model(user_id)
        model.reset_token = token_hash
        model.reset_token_expiry = expires_at
        await self._session.flush()
        logger.debug("Stored reset token for user: %s", user_id)

    async def find_by_reset_token(self, token_hash: str) -> User | None:
        stmt = (
            select(UserModel)
            .where(UserModel.reset_token == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def clear_reset_token(self, user_id: int) -> None:
        model = await self._require_model(user_id)
        model.reset_token = None
        model.reset_token_expiry = None
        await self._session.flush()

    async def consume_reset_token(
        self,
        user_id: int,
        token_hash: str,
        password_hash: str,
        now: datetime,
    ) -> bool:
        # One conditional UPDATE; a concurrent consumer sees rowcount 0
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id,
                UserModel.reset_token == token_hash,
                UserModel.reset_token_expiry > now,
            )
            .values(
                password_hash=password_hash,
                reset_token=None,
                reset_token_expiry=None,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        consumed = result.rowcount == 1

        if consumed:
            logger.info("Consumed reset token for user: %s", user_id)
        return consumed

    async def _find_model_by_id(self, user_id: int) -> UserModel | None:
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _require_model(self, user_id: int) -> UserModel:
        model = await self._find_model_by_id(user_id)
        if model is None:
            msg = f"User not found: {user_id}"
            raise LookupError(msg)
        return model

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            name=model.name,
            password_hash=model.password_hash,
            phone=model.phone,
            reset_token_hash=model.reset_token,
            reset_token_expiry=model.reset_token_expiry,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            email=user.email,
            name=user.name,
            phone=user.phone,
            password_hash=user.password_hash,
            reset_token=user.reset_token_hash,
            reset_token_expiry=user.reset_token_expiry,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
