"""Auth schemas and data structures."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session token payload.

    Attributes
    ----------
    user_id
        The unique identifier of the user
    email
        The user's email address
    iat
        When the token was issued
    exp
        Token expiration timestamp
    """

    user_id: int
    email: str
    iat: datetime
    exp: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check if the token has expired at ``now``."""
        return now > self.exp

    @property
    def lifetime_seconds(self) -> int:
        return int((self.exp - self.iat).total_seconds())
