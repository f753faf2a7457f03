"""JWT session token service.

Provides session token issuance and stateless verification.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import jwt

from loginapp_auth.exceptions import InvalidTokenError, TokenExpiredError
from loginapp_auth.schemas import TokenPayload
from loginapp_auth.time import utc_now


class JWTService:
    """Service for session token creation and verification.

    Tokens are HS256-signed and self-contained: verification needs only the
    signing secret, so there is no server-side session list and no way to
    revoke a token before it expires.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue(42, "user@example.com", extended_lifetime=True)
    >>> payload = service.verify(token)
    >>> print(payload.user_id)
    42
    """

    DEFAULT_SESSION_EXPIRE_DAYS = 7
    DEFAULT_REMEMBER_ME_EXPIRE_DAYS = 30
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        session_expire_days: int = DEFAULT_SESSION_EXPIRE_DAYS,
        remember_me_expire_days: int = DEFAULT_REMEMBER_ME_EXPIRE_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        session_expire_days
            Days until a regular session token expires (default 7)
        remember_me_expire_days
            Days until a "remember me" session token expires (default 30)
        clock
            Returns the current timezone-aware UTC time
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._session_expire = timedelta(days=session_expire_days)
        self._remember_me_expire = timedelta(days=remember_me_expire_days)
        self._clock = clock

    def __repr__(self) -> str:
        return f"JWTService(algorithm={self.ALGORITHM!r})"

    def lifetime_for(self, extended_lifetime: bool) -> timedelta:
        """Return the token lifetime for the caller's "remember me" choice."""
        return self._remember_me_expire if extended_lifetime else self._session_expire

    def issue(
        self,
        user_id: int,
        email: str,
        extended_lifetime: bool = False,
    ) -> str:
        """Create a signed session token.

        Parameters
        ----------
        user_id
            The user's unique identifier
        email
            The user's email address
        extended_lifetime
            Use the "remember me" lifetime instead of the default one

        Returns
        -------
        The encoded JWT token string
        """
        now = self._clock()
        expire = now + self.lifetime_for(extended_lifetime)

        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> TokenPayload:
        """Verify and decode a session token.

        The signature is checked first; expiry is checked afterwards against
        the service clock, so an expired token with a forged signature is
        reported as invalid rather than expired.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If the signature does not verify or the payload is malformed
        TokenExpiredError
            If the token is past its expiry
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "email", "iat", "exp"],
                },
            )

            decoded = TokenPayload(
                user_id=int(payload["sub"]),
                email=str(payload["email"]),
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError from e
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            raise InvalidTokenError from e

        if decoded.is_expired(self._clock()):
            raise TokenExpiredError

        return decoded
