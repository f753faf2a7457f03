"""Password strength policy."""

import re
from dataclasses import dataclass

from loginapp_auth.exceptions import WeakPasswordError

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class PasswordPolicy:
    """Rules a new password must satisfy before it is hashed.

    Attributes
    ----------
    min_length
        Minimum number of characters
    max_bytes
        Maximum UTF-8 encoded length
    require_mixed_case
        Require at least one lower-case and one upper-case ASCII letter
    require_digit
        Require at least one ASCII digit
    """

    min_length: int = 6
    max_bytes: int = BCRYPT_MAX_BYTES
    require_mixed_case: bool = True
    require_digit: bool = True

    def validate(self, password: str) -> None:
        """Raise ``WeakPasswordError`` with the first rule the password breaks."""
        if not password:
            msg = "Password is required"
            raise WeakPasswordError(msg)

        if len(password) < self.min_length:
            msg = f"Password must be at least {self.min_length} characters long"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.max_bytes:
            msg = "Password is too long"
            raise WeakPasswordError(msg)

        if self.require_mixed_case and not (
            _LOWER.search(password) and _UPPER.search(password)
        ):
            msg = "Password must contain both uppercase and lowercase letters"
            raise WeakPasswordError(msg)

        if self.require_digit and not _DIGIT.search(password):
            msg = "Password must contain at least one number"
            raise WeakPasswordError(msg)
