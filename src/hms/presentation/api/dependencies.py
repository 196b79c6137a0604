"""FastAPI dependency injection for the HMS API.

Provides dependencies for:
- Database engine and sessions
- Authentication services (password verifier, token issuer)
- Application service instances
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hms.application.services import (
    AuthenticationService,
    IdentityResolver,
    UserService,
)
from hms.infrastructure.persistence.sqlalchemy import (
    Base,
    UserRepositorySQLAlchemy,
)
from hms.presentation.api.config import get_api_settings
from hms_auth import PasswordHashingService, SessionTokenService
from hms_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for file-based SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def create_tables() -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_password_service(
    settings: Settings = Depends(get_api_settings),
) -> PasswordHashingService:
    """Get password hashing service with the configured work factor."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_session_token_service(
    settings: Settings = Depends(get_api_settings),
) -> SessionTokenService:
    """Get the session token issuer."""
    return SessionTokenService(token_bytes=settings.session_token_bytes)


async def get_authentication_service(
    session: DBSession,
    password_service: PasswordHashingService = Depends(get_password_service),
    token_service: SessionTokenService = Depends(get_session_token_service),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    Every collaborator is passed in explicitly; nothing is module-global.
    """
    identity_resolver = IdentityResolver(UserRepositorySQLAlchemy(session))

    return AuthenticationService(
        identity_resolver=identity_resolver,
        password_service=password_service,
        token_service=token_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# User Management
# -----------------------------------------------------------------------------


async def get_user_service(
    session: DBSession,
    password_service: PasswordHashingService = Depends(get_password_service),
) -> UserService:
    """Get user management service bound to the request session."""
    return UserService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
    )


# Type alias for injected user service
UserManagement = Annotated[UserService, Depends(get_user_service)]
