from loginapp_identity.domain.user.value_objects.email import Email
from loginapp_identity.domain.user.value_objects.reset_token_state import (
    ResetTokenState,
)

__all__ = [
    "Email",
    "ResetTokenState",
]
