"""SQLAlchemy persistence for the hospital backend.

Usage:
    from hms.infrastructure.persistence.sqlalchemy import (
        Base,
        UserModel,
        UserRepositorySQLAlchemy,
    )
"""

from hms.infrastructure.persistence.sqlalchemy.models import (
    Base,
    TimestampMixin,
    UserModel,
)
from hms.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UserModel",
    "UserRepositorySQLAlchemy",
]
