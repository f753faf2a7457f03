"""User aggregate for identity and credential state."""

from datetime import datetime
from typing import Union

from loginapp_auth.time import ensure_tz_aware, utc_now
from loginapp_identity.domain.user.exceptions import InvalidResetTokenTransitionError
from loginapp_identity.domain.user.value_objects import Email, ResetTokenState


class User:
    """
    User aggregate root.

    Owns the password digest and the single live password reset token.
    The reset token is kept as a digest together with its expiry; both are
    set or both are None.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: Union[str, Email],
        name: str,
        password_hash: str,
        phone: str | None = None,
        id: int | None = None,
        reset_token_hash: str | None = None,
        reset_token_expiry: datetime | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        if (reset_token_hash is None) != (reset_token_expiry is None):
            msg = "reset token and reset token expiry must be set together"
            raise ValueError(msg)

        self._email = email if isinstance(email, Email) else Email(email)
        self._name = name
        self._password_hash = password_hash
        self._phone = phone
        self._id = id
        self._reset_token_hash = reset_token_hash
        self._reset_token_expiry = (
            ensure_tz_aware(reset_token_expiry) if reset_token_expiry else None
        )
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def persisted_id(self) -> int:
        """The id, for users that have been saved."""
        if self._id is None:
            msg = "User has not been saved yet"
            raise ValueError(msg)
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def name(self) -> str:
        return self._name

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def reset_token_hash(self) -> str | None:
        return self._reset_token_hash

    @property
    def reset_token_expiry(self) -> datetime | None:
        return self._reset_token_expiry

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def assign_id(self, user_id: int) -> None:
        if self._id is not None:
            msg = f"User already has id {self._id}"
            raise ValueError(msg)
        self._id = user_id

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def reset_token_state(self, now: datetime) -> ResetTokenState:
        """State of the currently stored reset token as seen at ``now``."""
        if self._reset_token_expiry is None:
            return ResetTokenState.NONE
        if self._reset_token_expiry <= now:
            return ResetTokenState.EXPIRED
        return ResetTokenState.ISSUED

    def issue_reset_token(
        self,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> ResetTokenState:
        """Store a new reset token, retiring whatever token came before it.

        Returns
        -------
        The final state of the previous token: SUPERSEDED if it was still
        live, EXPIRED if it had lapsed, NONE if there was none.
        """
        previous = self.reset_token_state(now)
        if previous is ResetTokenState.ISSUED:
            self._transition(previous, ResetTokenState.SUPERSEDED)
            previous = ResetTokenState.SUPERSEDED

        self._transition(ResetTokenState.NONE, ResetTokenState.ISSUED)
        self._reset_token_hash = token_hash
        self._reset_token_expiry = ensure_tz_aware(expires_at)
        self._updated_at = utc_now()
        return previous

    def consume_reset_token(self, now: datetime) -> ResetTokenState:
        self._transition(self.reset_token_state(now), ResetTokenState.CONSUMED)
        self.clear_reset_token()
        return ResetTokenState.CONSUMED

    def clear_reset_token(self) -> None:
        self._reset_token_hash = None
        self._reset_token_expiry = None
        self._updated_at = utc_now()

    @staticmethod
    def _transition(current: ResetTokenState, target: ResetTokenState) -> None:
        if not current.can_transition_to(target):
            raise InvalidResetTokenTransitionError(current.value, target.value)

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        name: str,
        password_hash: str,
        phone: str | None = None,
    ) -> "User":
        return cls(email=email, name=name, password_hash=password_hash, phone=phone)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: int,
        email: Union[str, Email],
        name: str,
        password_hash: str,
        phone: str | None,
        reset_token_hash: str | None,
        reset_token_expiry: datetime | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            name=name,
            password_hash=password_hash,
            phone=phone,
            reset_token_hash=reset_token_hash,
            reset_token_expiry=reset_token_expiry,
            created_at=ensure_tz_aware(created_at),
            updated_at=ensure_tz_aware(updated_at),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value})"
