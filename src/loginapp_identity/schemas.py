"""Identity schemas and data structures.

These are simple data classes used for transferring identity
data between the services and the transport layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loginapp_identity.domain.user import ResetTokenState, User


@dataclass(frozen=True)
class PublicUser:
    """The outward view of a user. Never carries credential material."""

    id: int
    email: str
    name: str
    phone: str | None

    @classmethod
    def from_user(cls, user: User) -> PublicUser:
        if user.id is None:
            msg = "Cannot expose a user that has not been persisted"
            raise ValueError(msg)
        return cls(id=user.id, email=user.email, name=user.name, phone=user.phone)


@dataclass(frozen=True)
class SessionGrant:
    """A freshly issued session token and the user it belongs to.

    Attributes
    ----------
    token
        The signed session token
    user
        Public view of the authenticated user
    expires_in
        Token lifetime in seconds
    """

    token: str
    user: PublicUser
    expires_in: int | None = None


@dataclass(frozen=True)
class ServiceResponse:
    """Successful outcome of a credential operation."""

    success: bool
    message: str
    data: SessionGrant | None = None

    @classmethod
    def ok(cls, message: str, data: SessionGrant | None = None) -> ServiceResponse:
        return cls(success=True, message=message, data=data)


@dataclass(frozen=True)
class IssuedResetToken:
    """A newly issued reset token.

    ``token`` is the raw value to send to the user; only its digest is
    stored. ``previous_state`` is how the user's prior token ended.
    """

    token: str
    expires_at: datetime
    previous_state: ResetTokenState
