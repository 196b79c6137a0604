"""User aggregate: a staff account that can log in."""

from datetime import datetime
from typing import Union

from hms.domain.shared.time import utc_now
from hms.domain.user.value_objects import UserRole


class User:
    """
    User aggregate root.

    Holds the staff member's identity, role and stored password hash.
    The numeric ``id`` is assigned by the credential store on first save
    and is ``None`` until then.
    """

    def __init__(
        self,
        username: str,
        password_hash: str,
        role: Union[str, UserRole],
        name: str,
        email: str | None = None,
        phone: str | None = None,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._username = username
        self._password_hash = password_hash
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._name = name
        self._email = email
        self._phone = phone
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str | None:
        return self._email

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def rename(self, username: str, name: str) -> None:
        self._username = username
        self._name = name
        self._updated_at = utc_now()

    def change_email(self, email: str | None) -> None:
        self._email = email
        self._updated_at = utc_now()

    def change_phone(self, phone: str | None) -> None:
        self._phone = phone
        self._updated_at = utc_now()

    def change_role(self, role: Union[str, UserRole]) -> None:
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._updated_at = utc_now()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        username: str,
        password_hash: str,
        role: Union[str, UserRole],
        name: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> "User":
        return cls(
            username=username,
            password_hash=password_hash,
            role=role,
            name=name,
            email=email,
            phone=phone,
        )

    @classmethod
    def reconstitute(
        cls,
        id: int,
        username: str,
        password_hash: str,
        role: Union[str, UserRole],
        name: str,
        email: str | None,
        phone: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            username=username,
            password_hash=password_hash,
            role=role,
            name=name,
            email=email,
            phone=phone,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        # never include password_hash
        return (
            f"User(id={self._id}, username={self._username!r}, "
            f"role={self._role.value})"
        )
