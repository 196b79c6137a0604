"""User domain - staff accounts that can authenticate.

This domain handles:
- User aggregate (identity, role, stored password hash)
- Staff roles
- Repository interface for the credential store

Design notes:
- User ID is a numeric key assigned by the store
- Username and email are each unique across users; email may be absent
  on legacy records
- Repository interface defined here, implementation in infrastructure
"""

from hms.domain.user.aggregates import User
from hms.domain.user.exceptions import (
    EmailAlreadyExistsError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
)
from hms.domain.user.repositories import UserRepository
from hms.domain.user.value_objects import UserRole

__all__ = [
    "EmailAlreadyExistsError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UsernameAlreadyExistsError",
]
