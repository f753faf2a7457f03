"""Unit tests for the reset token state machine."""

import pytest

from loginapp_identity.domain.user import ResetTokenState


class TestResetTokenState:
    def test_none_can_only_be_issued(self):
        assert ResetTokenState.NONE.can_transition_to(ResetTokenState.ISSUED)
        assert not ResetTokenState.NONE.can_transition_to(ResetTokenState.CONSUMED)

    @pytest.mark.parametrize(
        "target",
        [
            ResetTokenState.CONSUMED,
            ResetTokenState.EXPIRED,
            ResetTokenState.SUPERSEDED,
        ],
    )
    def test_issued_transitions(self, target):
        assert ResetTokenState.ISSUED.can_transition_to(target)

    def test_issued_cannot_be_reissued(self):
        assert not ResetTokenState.ISSUED.can_transition_to(ResetTokenState.ISSUED)

    @pytest.mark.parametrize(
        "state",
        [
            ResetTokenState.CONSUMED,
            ResetTokenState.EXPIRED,
            ResetTokenState.SUPERSEDED,
        ],
    )
    def test_terminal_states(self, state):
        assert state.is_terminal
        assert not any(state.can_transition_to(t) for t in ResetTokenState)

    def test_non_terminal_states(self):
        assert not ResetTokenState.NONE.is_terminal
        assert not ResetTokenState.ISSUED.is_terminal
