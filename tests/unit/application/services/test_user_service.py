"""Unit tests for UserService."""

import logging
from unittest.mock import AsyncMock

import pytest

from hms.application.services import UserService
from hms.domain.user import (
    EmailAlreadyExistsError,
    User,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    UserRole,
)
from hms_auth import PasswordHashingService, WeakPasswordError


def _stored_user(
    user_id: int = 1,
    username: str = "nurse",
    email: str | None = "nurse@hospital.com",
    password_hash: str = "$2b$04$existinghashexistinghashexistinghashexistinghash12",
) -> User:
    return User.reconstitute(
        id=user_id,
        username=username,
        password_hash=password_hash,
        role=UserRole.NURSE,
        name="Nurse Mary Johnson",
        email=email,
        phone=None,
        created_at=None,
        updated_at=None,
    )


class TestUserServiceCreate:
    """Tests for provisioning staff accounts."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.user_repo.find_by_username.return_value = None
        self.user_repo.find_by_email.return_value = None
        self.user_repo.save.side_effect = lambda user: user
        self.password_service = PasswordHashingService(rounds=4)

        self.service = UserService(
            user_repository=self.user_repo,
            password_service=self.password_service,
        )

    @pytest.mark.asyncio
    async def test_create_user_stores_bcrypt_hash(self):
        # Act
        user = await self.service.create_user(
            username="doctor",
            password="doctor123",
            role="DOCTOR",
            name="Dr. John Smith",
            email="doctor@hospital.com",
        )

        # Assert
        assert user.role is UserRole.DOCTOR
        assert user.password_hash != "doctor123"
        assert self.password_service.verify("doctor123", user.password_hash)
        self.user_repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_user_rejects_duplicate_username(self):
        self.user_repo.find_by_username.return_value = _stored_user(username="doctor")

        with pytest.raises(UsernameAlreadyExistsError):
            await self.service.create_user(
                username="doctor",
                password="doctor123",
                role="DOCTOR",
                name="Dr. John Smith",
                email="doctor@hospital.com",
            )

        self.user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_user_rejects_duplicate_email(self):
        self.user_repo.find_by_email.return_value = _stored_user()

        with pytest.raises(EmailAlreadyExistsError, match="already in use"):
            await self.service.create_user(
                username="nurse2",
                password="nurse1234",
                role="NURSE",
                name="Nurse Two",
                email="nurse@hospital.com",
            )

        self.user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_user_rejects_weak_password(self):
        with pytest.raises(WeakPasswordError):
            await self.service.create_user(
                username="doctor",
                password="short",
                role="DOCTOR",
                name="Dr. John Smith",
            )

        self.user_repo.save.assert_not_awaited()


class TestUserServiceReadUpdateDelete:
    """Tests for reading, updating and deleting accounts."""

    def setup_method(self):
        self.user_repo = AsyncMock()
        self.user_repo.find_by_username.return_value = None
        self.user_repo.find_by_email.return_value = None
        self.user_repo.save.side_effect = lambda user: user
        self.password_service = PasswordHashingService(rounds=4)

        self.service = UserService(
            user_repository=self.user_repo,
            password_service=self.password_service,
        )

    @pytest.mark.asyncio
    async def test_get_user_raises_when_missing(self):
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            await self.service.get_user(99)

    @pytest.mark.asyncio
    async def test_update_without_password_keeps_hash(self):
        # Arrange
        stored = _stored_user()
        original_hash = stored.password_hash
        self.user_repo.find_by_id.return_value = stored

        # Act
        updated = await self.service.update_user(
            user_id=1,
            username="nurse",
            role="ADMINISTRATOR",
            name="Mary Johnson",
            email="nurse@hospital.com",
            password="",
        )

        # Assert
        assert updated.password_hash == original_hash
        assert updated.role is UserRole.ADMINISTRATOR
        assert updated.name == "Mary Johnson"

    @pytest.mark.asyncio
    async def test_update_with_password_rehashes(self):
        stored = _stored_user()
        self.user_repo.find_by_id.return_value = stored

        updated = await self.service.update_user(
            user_id=1,
            username="nurse",
            role="NURSE",
            name="Nurse Mary Johnson",
            email="nurse@hospital.com",
            password="new-password",
        )

        assert self.password_service.verify("new-password", updated.password_hash)

    @pytest.mark.asyncio
    async def test_update_allows_keeping_own_email(self):
        stored = _stored_user()
        self.user_repo.find_by_id.return_value = stored
        self.user_repo.find_by_email.return_value = stored

        await self.service.update_user(
            user_id=1,
            username="nurse",
            role="NURSE",
            name="Nurse Mary Johnson",
            email="nurse@hospital.com",
        )

        self.user_repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_rejects_email_of_other_user(self):
        self.user_repo.find_by_id.return_value = _stored_user()
        self.user_repo.find_by_email.return_value = _stored_user(
            user_id=2,
            username="doctor",
            email="doctor@hospital.com",
        )

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.update_user(
                user_id=1,
                username="nurse",
                role="NURSE",
                name="Nurse Mary Johnson",
                email="doctor@hospital.com",
            )

    @pytest.mark.asyncio
    async def test_update_rejects_username_of_other_user(self):
        self.user_repo.find_by_id.return_value = _stored_user()
        self.user_repo.find_by_username.return_value = _stored_user(
            user_id=2,
            username="doctor",
        )

        with pytest.raises(UsernameAlreadyExistsError):
            await self.service.update_user(
                user_id=1,
                username="doctor",
                role="NURSE",
                name="Nurse Mary Johnson",
                email="nurse@hospital.com",
            )

    @pytest.mark.asyncio
    async def test_delete_missing_user_raises(self):
        self.user_repo.delete.return_value = False

        with pytest.raises(UserNotFoundError):
            await self.service.delete_user(42)


class TestMigratePlaintextPasswords:
    """Tests for the legacy plaintext password migration."""

    def setup_method(self):
        self.user_repo = AsyncMock()
        self.user_repo.save.side_effect = lambda user: user
        self.password_service = PasswordHashingService(rounds=4)

        self.service = UserService(
            user_repository=self.user_repo,
            password_service=self.password_service,
        )

    @pytest.mark.asyncio
    async def test_only_plaintext_secrets_are_rehashed(self):
        # Arrange
        hashed = _stored_user(
            user_id=1,
            password_hash=self.password_service.hash("nurse123"),
        )
        legacy = _stored_user(user_id=2, username="admin", password_hash="admin")
        self.user_repo.list_all.return_value = [hashed, legacy]

        # Act
        migrated = await self.service.migrate_plaintext_passwords()

        # Assert
        assert migrated == 1
        assert self.password_service.is_hashed(legacy.password_hash)
        assert self.password_service.verify("admin", legacy.password_hash)
        self.user_repo.save.assert_awaited_once_with(legacy)

    @pytest.mark.asyncio
    async def test_nothing_to_migrate(self):
        self.user_repo.list_all.return_value = []

        assert await self.service.migrate_plaintext_passwords() == 0
        self.user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_overlong_plaintext_is_skipped(self, caplog):
        # Arrange
        overlong = _stored_user(user_id=1, username="legacy", password_hash="x" * 80)
        nurse = _stored_user(user_id=2, username="nurse", password_hash="nurse123")
        self.user_repo.list_all.return_value = [overlong, nurse]

        # Act
        with caplog.at_level(logging.WARNING):
            migrated = await self.service.migrate_plaintext_passwords()

        # Assert
        assert migrated == 1
        assert overlong.password_hash == "x" * 80
        assert self.password_service.verify("nurse123", nurse.password_hash)
        self.user_repo.save.assert_awaited_once_with(nurse)
        assert "user id 1" in caplog.text
