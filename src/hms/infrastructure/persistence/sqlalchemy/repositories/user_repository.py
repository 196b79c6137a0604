"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hms.domain.shared import ConflictError
from hms.domain.user import (
    EmailAlreadyExistsError,
    User,
    UsernameAlreadyExistsError,
    UserRepository,
)
from hms.infrastructure.persistence.sqlalchemy.models import UserModel
from hms_auth import DependencyFailureError

logger = logging.getLogger(__name__)

# Drivers such as asyncpg raise OSError subclasses (e.g. ConnectionRefusedError)
# for unreachable servers without SQLAlchemy wrapping them
STORE_ERRORS = (SQLAlchemyError, OSError)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Database and connection errors are re-raised as ``DependencyFailureError``
    so callers can tell an outage apart from a failed login.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> User | None:
        model = await self._find_model_by_id(user_id)
        return self._map_to_domain(model) if model else None

    async def find_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        model = await self._scalar_one_or_none(stmt)
        return self._map_to_domain(model) if model else None

    async def find_by_username(self, username: str) -> User | None:
        stmt = select(UserModel).where(UserModel.username == username)
        model = await self._scalar_one_or_none(stmt)
        return self._map_to_domain(model) if model else None

    async def save(self, user: User) -> User:
        existing = (
            await self._find_model_by_id(user.id) if user.id is not None else None
        )

        try:
            if existing:
                self._update_model(existing, user)
                model = existing
                await self._session.flush()
                logger.debug("Updated user: %s", user.id)
            else:
                model = self._map_to_model(user)
                self._session.add(model)
                await self._session.flush()
                logger.info("Created user: %s (username: %s)", model.id, model.username)
        except IntegrityError as e:
            raise self._conflict_for(e, user) from e
        except STORE_ERRORS as e:
            logger.exception("Saving user failed")
            raise DependencyFailureError("Credential store unavailable") from e

        return self._map_to_domain(model)

    async def delete(self, user_id: int) -> bool:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return False

        try:
            await self._session.delete(model)
            await self._session.flush()
        except STORE_ERRORS as e:
            logger.exception("Deleting user %s failed", user_id)
            raise DependencyFailureError("Credential store unavailable") from e

        logger.info("Deleted user: %s", user_id)
        return True

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        try:
            result = await self._session.execute(stmt)
        except STORE_ERRORS as e:
            logger.exception("Counting users failed")
            raise DependencyFailureError("Credential store unavailable") from e
        return result.scalar_one()

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.id)
        try:
            result = await self._session.execute(stmt)
        except STORE_ERRORS as e:
            logger.exception("Listing users failed")
            raise DependencyFailureError("Credential store unavailable") from e
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _find_model_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        return await self._scalar_one_or_none(stmt)

    async def _scalar_one_or_none(self, stmt: Select[Any]) -> UserModel | None:
        try:
            result = await self._session.execute(stmt)
        except STORE_ERRORS as e:
            logger.exception("User lookup failed")
            raise DependencyFailureError("Credential store unavailable") from e
        return result.scalar_one_or_none()

    def _conflict_for(self, error: IntegrityError, user: User) -> ConflictError:
        message = str(error.orig).lower()
        if "email" in message:
            return EmailAlreadyExistsError(user.email or "")
        if "username" in message:
            return UsernameAlreadyExistsError(user.username)
        return ConflictError("User conflicts with an existing record")

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            username=model.username,
            password_hash=model.password_hash,
            role=model.role,
            name=model.name,
            email=model.email,
            phone=model.phone,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
            name=user.name,
            phone=user.phone,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.username = user.username
        model.email = user.email
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.name = user.name
        model.phone = user.phone
        model.updated_at = user.updated_at
