"""User management: provisioning, profile updates and deletion."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Union

from hms.domain.user import (
    EmailAlreadyExistsError,
    User,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    UserRole,
)
from hms_auth import WeakPasswordError

if TYPE_CHECKING:
    from hms.domain.user import UserRepository
    from hms_auth import PasswordHashingService

logger = logging.getLogger(__name__)


class UserService:
    """
    Application service for staff account administration.

    Passwords handed to this service are always plaintext and are stored
    as bcrypt hashes. Uniqueness of username and email is checked before
    saving; the database constraint is the final guard.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service

    async def list_users(self) -> list[User]:
        return await self._user_repo.list_all()

    async def get_user(self, user_id: int) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def create_user(
        self,
        username: str,
        password: str,
        role: Union[str, UserRole],
        name: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> User:
        await self._ensure_username_free(username)
        if email:
            await self._ensure_email_free(email)

        password_hash = self._password_service.hash(password)
        user = User.create(
            username=username,
            password_hash=password_hash,
            role=role,
            name=name,
            email=email,
            phone=phone,
        )
        saved = await self._user_repo.save(user)

        logger.info("User created: id %s (role: %s)", saved.id, saved.role.value)
        return saved

    async def update_user(
        self,
        user_id: int,
        username: str,
        role: Union[str, UserRole],
        name: str,
        email: str | None = None,
        phone: str | None = None,
        password: str | None = None,
    ) -> User:
        user = await self.get_user(user_id)

        if username != user.username:
            await self._ensure_username_free(username, exclude_id=user_id)
        if email and email != user.email:
            await self._ensure_email_free(email, exclude_id=user_id)

        user.rename(username=username, name=name)
        user.change_role(role)
        user.change_email(email)
        user.change_phone(phone)

        # Only a non-empty password replaces the stored one
        if password:
            user.change_password_hash(self._password_service.hash(password))
            logger.info("Password changed for user: id %s", user_id)

        saved = await self._user_repo.save(user)
        logger.debug("User updated: id %s", user_id)
        return saved

    async def delete_user(self, user_id: int) -> None:
        deleted = await self._user_repo.delete(user_id)
        if not deleted:
            raise UserNotFoundError(user_id)
        logger.info("User deleted: id %s", user_id)

    async def migrate_plaintext_passwords(self) -> int:
        """Re-hash every stored secret that is not yet a bcrypt hash.

        Legacy records kept plaintext passwords. Verification only accepts
        bcrypt hashes, so those accounts cannot log in until migrated.
        Secrets bcrypt cannot hash (over 72 bytes) are skipped and logged;
        those accounts need a password reset.

        Returns
        -------
        Number of users whose stored secret was re-hashed
        """
        migrated = 0
        for user in await self._user_repo.list_all():
            if self._password_service.is_hashed(user.password_hash):
                continue
            try:
                new_hash = self._password_service.hash(
                    user.password_hash, enforce_strength=False
                )
            except WeakPasswordError:
                logger.warning(
                    "Skipped plaintext password migration for user id %s: "
                    "secret exceeds the bcrypt input limit",
                    user.id,
                )
                continue
            user.change_password_hash(new_hash)
            await self._user_repo.save(user)
            migrated += 1

        if migrated:
            logger.warning("Migrated %d plaintext password(s) to bcrypt", migrated)
        return migrated

    async def _ensure_username_free(
        self,
        username: str,
        exclude_id: int | None = None,
    ) -> None:
        existing = await self._user_repo.find_by_username(username)
        if existing is not None and existing.id != exclude_id:
            raise UsernameAlreadyExistsError(username)

    async def _ensure_email_free(
        self,
        email: str,
        exclude_id: int | None = None,
    ) -> None:
        existing = await self._user_repo.find_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise EmailAlreadyExistsError(email)
