"""Tests for UserRepositorySQLAlchemy against a real database."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from hms.domain.shared import ConflictError
from hms.domain.user import (
    EmailAlreadyExistsError,
    User,
    UsernameAlreadyExistsError,
    UserRole,
)
from hms.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from hms_auth import DependencyFailureError

HASH = "$2b$04$abcdefghijklmnopqrstuuVwHCmS0dKkRbl0JcW0nE0n9vHZ9I6Hm"


def _new_user(username: str = "doctor", email: str | None = "doctor@hospital.com"):
    return User.create(
        username=username,
        password_hash=HASH,
        role=UserRole.DOCTOR,
        name="Dr. John Smith",
        email=email,
        phone="+1-555-0002",
    )


@pytest.fixture
def user_repo(db_session):
    """Create UserRepository instance with the test session."""
    return UserRepositorySQLAlchemy(db_session)


class TestUserRepositorySQLAlchemy:
    """Persistence tests (in-memory SQLite)."""

    @pytest.mark.asyncio
    async def test_save_assigns_id(self, user_repo):
        saved = await user_repo.save(_new_user())

        assert isinstance(saved.id, int)
        assert saved.username == "doctor"
        assert saved.password_hash == HASH
        assert saved.role is UserRole.DOCTOR

    @pytest.mark.asyncio
    async def test_find_by_id(self, user_repo):
        saved = await user_repo.save(_new_user())

        found = await user_repo.find_by_id(saved.id)

        assert found == saved
        assert found.email == "doctor@hospital.com"
        assert found.phone == "+1-555-0002"

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repo):
        assert await user_repo.find_by_id(12345) is None

    @pytest.mark.asyncio
    async def test_find_by_email(self, user_repo):
        saved = await user_repo.save(_new_user())

        found = await user_repo.find_by_email("doctor@hospital.com")

        assert found is not None
        assert found.id == saved.id

    @pytest.mark.asyncio
    async def test_find_by_email_is_exact_match(self, user_repo):
        await user_repo.save(_new_user())

        assert await user_repo.find_by_email("DOCTOR@hospital.com") is None
        assert await user_repo.find_by_email("doctor") is None

    @pytest.mark.asyncio
    async def test_find_by_username(self, user_repo):
        saved = await user_repo.save(_new_user())

        found = await user_repo.find_by_username("doctor")

        assert found is not None
        assert found.id == saved.id
        assert await user_repo.find_by_username("doctor@hospital.com") is None

    @pytest.mark.asyncio
    async def test_save_updates_existing(self, user_repo):
        saved = await user_repo.save(_new_user())
        saved.change_role(UserRole.ADMINISTRATOR)
        saved.change_email(None)

        await user_repo.save(saved)
        found = await user_repo.find_by_id(saved.id)

        assert found.role is UserRole.ADMINISTRATOR
        assert found.email is None

    @pytest.mark.asyncio
    async def test_users_without_email_do_not_conflict(self, user_repo):
        await user_repo.save(_new_user("legacy1", email=None))
        await user_repo.save(_new_user("legacy2", email=None))

        assert await user_repo.count() == 2

    @pytest.mark.asyncio
    async def test_duplicate_username_raises_conflict(self, user_repo):
        await user_repo.save(_new_user("doctor", "a@hospital.com"))

        with pytest.raises(UsernameAlreadyExistsError):
            await user_repo.save(_new_user("doctor", "b@hospital.com"))

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_conflict(self, user_repo):
        await user_repo.save(_new_user("doctor1", "doctor@hospital.com"))

        with pytest.raises(EmailAlreadyExistsError):
            await user_repo.save(_new_user("doctor2", "doctor@hospital.com"))

    @pytest.mark.asyncio
    async def test_delete(self, user_repo):
        saved = await user_repo.save(_new_user())

        assert await user_repo.delete(saved.id) is True
        assert await user_repo.find_by_id(saved.id) is None
        assert await user_repo.delete(saved.id) is False

    @pytest.mark.asyncio
    async def test_list_all_ordered_by_id(self, user_repo):
        first = await user_repo.save(_new_user("a", "a@hospital.com"))
        second = await user_repo.save(_new_user("b", "b@hospital.com"))

        users = await user_repo.list_all()

        assert [u.id for u in users] == [first.id, second.id]
        assert await user_repo.count() == 2


class TestUserRepositoryFailures:
    """Database errors surface as DependencyFailureError."""

    def setup_method(self):
        self.session = Mock(spec=AsyncSession)
        self.session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
        )
        self.repo = UserRepositorySQLAlchemy(self.session)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "arg"),
        [
            ("find_by_id", 1),
            ("find_by_email", "doctor@hospital.com"),
            ("find_by_username", "doctor"),
        ],
    )
    async def test_lookup_failure(self, method, arg):
        with pytest.raises(DependencyFailureError) as exc_info:
            await getattr(self.repo, method)(arg)

        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_count_failure(self):
        with pytest.raises(DependencyFailureError):
            await self.repo.count()

    @pytest.mark.asyncio
    async def test_list_failure(self):
        with pytest.raises(DependencyFailureError):
            await self.repo.list_all()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError(111, "Connect call failed"),
            OSError("Network is unreachable"),
        ],
    )
    async def test_connection_failure(self, error):
        """Unwrapped driver connection errors are outages too."""
        self.session.execute.side_effect = error

        with pytest.raises(DependencyFailureError) as exc_info:
            await self.repo.find_by_email("doctor@hospital.com")

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_save_connection_failure(self):
        self.session.flush = AsyncMock(
            side_effect=ConnectionRefusedError(111, "Connect call failed")
        )

        with pytest.raises(DependencyFailureError):
            await self.repo.save(_new_user())

    def test_unrecognised_integrity_error_is_generic_conflict(self):
        error = IntegrityError("INSERT", {}, Exception("CHECK constraint failed"))

        conflict = self.repo._conflict_for(error, _new_user())

        assert type(conflict) is ConflictError


@pytest.mark.integration
class TestUserRepositoryPostgres:
    """The same lookups against PostgreSQL (requires a running server)."""

    @pytest.mark.asyncio
    async def test_save_and_resolve(self, user_repo):
        saved = await user_repo.save(_new_user())

        assert (await user_repo.find_by_email("doctor@hospital.com")).id == saved.id
        assert (await user_repo.find_by_username("doctor")).id == saved.id

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_conflict(self, user_repo):
        await user_repo.save(_new_user("doctor1", "doctor@hospital.com"))

        with pytest.raises(EmailAlreadyExistsError):
            await user_repo.save(_new_user("doctor2", "doctor@hospital.com"))
