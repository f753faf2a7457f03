"""Password hashing service using bcrypt.

Provides salted one-way hashing, constant-time verification and a
timing-equalisation helper for logins against unknown accounts.
"""

from functools import lru_cache

import bcrypt

from loginapp_auth.exceptions import HashingError

_DUMMY_PASSWORD = b"loginapp_timing_dummy"


@lru_cache(maxsize=8)
def _dummy_hash(rounds: int) -> bytes:
    # Computed once per work factor so the first unknown-email login is not
    # measurably slower than later ones.
    return bcrypt.hashpw(_DUMMY_PASSWORD, bcrypt.gensalt(rounds=rounds))


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt with a per-call random salt embedded in the digest and a
    configurable work factor. Strength rules live in ``PasswordPolicy``;
    this service hashes whatever it is given.

    Hashing is CPU-bound and blocks for tens to hundreds of milliseconds
    depending on ``rounds``.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> digest = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", digest)
    True
    >>> service.verify("wrong_password", digest)
    False
    """

    DEFAULT_ROUNDS = 10

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 10.
            Higher values are more secure but slower.
        """
        if not 4 <= rounds <= 31:  # noqa: PLR2004
            msg = "bcrypt rounds must be between 4 and 31"
            raise ValueError(msg)
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt digest as a string

        Raises
        ------
        HashingError
            If no salt could be generated or bcrypt rejects the input
        """
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        except (OSError, ValueError) as e:
            raise HashingError from e
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a digest.

        Never raises: a malformed digest simply fails verification.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt digest to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError, AttributeError):
            return False

    def dummy_verify(self, password: str) -> None:
        """Spend the same bcrypt work as a real verification, then discard it.

        Call this when no digest exists for the presented email so response
        time does not reveal whether the account exists.
        """
        try:
            bcrypt.checkpw(password.encode("utf-8"), _dummy_hash(self._rounds))
        except ValueError:
            return

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a digest was produced with a different work factor.

        After changing the rounds setting, outdated digests can be upgraded
        on the next successful login.

        Parameters
        ----------
        password_hash
            The existing digest to check

        Returns
        -------
        True if the digest should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:  # noqa: PLR2004
                current_rounds = int(parts[2])
                return current_rounds != self._rounds
        except (ValueError, IndexError):
            pass
        return True
