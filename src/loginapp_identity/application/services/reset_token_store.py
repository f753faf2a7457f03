import hashlib
import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from loginapp_auth.time import utc_now
from loginapp_identity.domain.user import ResetTokenState, User, UserRepository
from loginapp_identity.exceptions import ResetTokenExpiredError, ResetTokenInvalidError
from loginapp_identity.schemas import IssuedResetToken

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


class ResetTokenStore:
    """Issues single-use password reset tokens and consumes them exactly once.

    Raw tokens are 32 random bytes, hex encoded, and leave this class only to
    be mailed to the user. The repository sees their SHA-256 digest.
    """

    DEFAULT_TTL = timedelta(hours=1)

    def __init__(
        self,
        user_repository: UserRepository,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._user_repo = user_repository
        self._ttl = ttl
        self._clock = clock

    @staticmethod
    def hash_token(raw_token: str) -> str:
        return hashlib.sha256(raw_token.encode()).hexdigest()

    async def issue_for(self, user: User, now: datetime | None = None) -> IssuedResetToken:
        if user.id is None:
            msg = "Cannot issue a reset token for an unsaved user"
            raise ValueError(msg)

        now = now or self._clock()
        raw_token = secrets.token_hex(TOKEN_BYTES)
        token_hash = self.hash_token(raw_token)
        expires_at = now + self._ttl

        previous = user.issue_reset_token(token_hash, expires_at, now)
        await self._user_repo.set_reset_token(user.id, token_hash, expires_at)

        if previous is ResetTokenState.SUPERSEDED:
            logger.info("Superseded live reset token for user: %s", user.id)
        logger.info("Reset token issued for user: %s", user.id)

        return IssuedResetToken(
            token=raw_token,
            expires_at=expires_at,
            previous_state=previous,
        )

    async def validate(self, token: str, now: datetime | None = None) -> User:
        """Return the owner of a live token without consuming it."""
        if not token:
            raise ResetTokenInvalidError

        now = now or self._clock()
        user = await self._user_repo.find_by_reset_token(self.hash_token(token))
        if user is None:
            raise ResetTokenInvalidError

        if user.reset_token_state(now) is ResetTokenState.EXPIRED:
            logger.info("Expired reset token presented for user: %s", user.id)
            raise ResetTokenExpiredError

        return user

    async def consume(
        self,
        token: str,
        password_hash: str,
        now: datetime | None = None,
    ) -> User:
        """Swap in ``password_hash`` and burn the token, atomically.

        Of several concurrent calls with the same token at most one succeeds;
        the others raise ``ResetTokenInvalidError``.
        """
        now = now or self._clock()
        user = await self.validate(token, now)

        consumed = await self._user_repo.consume_reset_token(
            user.persisted_id,
            self.hash_token(token),
            password_hash,
            now,
        )
        if not consumed:
            logger.warning("Reset token for user %s was already consumed", user.id)
            raise ResetTokenInvalidError

        user.consume_reset_token(now)
        user.change_password_hash(password_hash)
        return user
