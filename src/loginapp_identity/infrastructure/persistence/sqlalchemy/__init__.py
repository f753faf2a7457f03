"""SQLAlchemy persistence for identity."""

from loginapp_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)
from loginapp_identity.infrastructure.persistence.sqlalchemy.engine import (
    create_engine_from_url,
    prepare_database_url,
)
from loginapp_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from loginapp_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "IdentityBase",
    "TimestampMixin",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "create_engine_from_url",
    "prepare_database_url",
]
