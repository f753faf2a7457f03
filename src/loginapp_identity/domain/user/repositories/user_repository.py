"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Union

from loginapp_identity.domain.user.aggregates.user import User
from loginapp_identity.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Implementations provide per-row consistency. ``consume_reset_token`` is
    the only compound write and must be a single atomic conditional update.
    """

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their email address (case-insensitive)."""

    @abstractmethod
    async def insert(self, user: User) -> int:
        """Persist a new user and return its assigned ID.

        Raises
        ------
        EmailAlreadyExistsError
            If another user already holds the email address
        """

    @abstractmethod
    async def update_password(self, user_id: int, password_hash: str) -> None:
        """Replace a user's password digest."""

    @abstractmethod
    async def set_reset_token(
        self,
        user_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> None:
        """Store a reset token digest and expiry, overwriting any previous pair."""

    @abstractmethod
    async def find_by_reset_token(self, token_hash: str) -> Optional[User]:
        """Find the user holding a reset token digest, expired or not."""

    @abstractmethod
    async def clear_reset_token(self, user_id: int) -> None:
        """Remove a user's reset token and expiry."""

    @abstractmethod
    async def consume_reset_token(
        self,
        user_id: int,
        token_hash: str,
        password_hash: str,
        now: datetime,
    ) -> bool:
        """Set a new password and clear the reset token in one atomic step.

        The write only happens if the stored digest still equals
        ``token_hash`` and its expiry is strictly after ``now``.

        Returns
        -------
        True if this call consumed the token, False if it was already
        consumed, replaced or expired
        """
