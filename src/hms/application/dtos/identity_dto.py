"""DTOs returned across the authentication boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hms.domain.user import User


@dataclass(frozen=True)
class SafeIdentity:
    """Secret-free projection of a User.

    Only these five fields ever leave the authentication service.
    """

    id: int
    username: str
    role: str
    name: str
    email: str | None

    @classmethod
    def from_user(cls, user: User) -> SafeIdentity:
        return cls(
            id=user.id,
            username=user.username,
            role=user.role.value,
            name=user.name,
            email=user.email,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "name": self.name,
            "email": self.email,
        }


@dataclass(frozen=True)
class AuthenticationResult:
    """Outcome of a successful login."""

    token: str
    identity: SafeIdentity

    def __repr__(self) -> str:
        return f"AuthenticationResult(identity={self.identity!r})"
