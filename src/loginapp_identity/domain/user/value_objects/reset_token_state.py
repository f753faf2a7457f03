"""Lifecycle of a single password reset token."""

from enum import Enum


class ResetTokenState(str, Enum):
    """States a reset token moves through.

    NONE -> ISSUED -> (CONSUMED | EXPIRED | SUPERSEDED)

    EXPIRED is never written anywhere: it is derived from the stored expiry
    whenever the token is looked at.
    """

    NONE = "none"
    ISSUED = "issued"
    CONSUMED = "consumed"
    EXPIRED = "expired"
    SUPERSEDED = "superseded"

    def can_transition_to(self, target: "ResetTokenState") -> bool:
        return target in _TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]


_TRANSITIONS: dict[ResetTokenState, frozenset[ResetTokenState]] = {
    ResetTokenState.NONE: frozenset({ResetTokenState.ISSUED}),
    ResetTokenState.ISSUED: frozenset(
        {
            ResetTokenState.CONSUMED,
            ResetTokenState.EXPIRED,
            ResetTokenState.SUPERSEDED,
        },
    ),
    ResetTokenState.CONSUMED: frozenset(),
    ResetTokenState.EXPIRED: frozenset(),
    ResetTokenState.SUPERSEDED: frozenset(),
}
