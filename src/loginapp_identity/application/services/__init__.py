from loginapp_identity.application.services.credential_service import (
    CredentialService,
)
from loginapp_identity.application.services.reset_token_store import ResetTokenStore

__all__ = [
    "CredentialService",
    "ResetTokenStore",
]
