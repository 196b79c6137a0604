"""User repository interface (the credential store)."""

from abc import ABC, abstractmethod
from typing import Optional

from hms.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Lookups are exact matches and return ``None`` when nothing matches.
    Implementations raise ``hms_auth.DependencyFailureError`` when the
    underlying store cannot be reached.
    """

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by their numeric ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email address."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save or update a user, returning it with its assigned ID."""

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete a user by ID. Returns False if it did not exist."""

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all users."""
