"""Demo staff account seeding for HMS.

Creates the demo staff accounts when the user table is empty. Existing
data is never touched, so running the seeder twice is harmless.

Usage:
    python -m hms_demo.seed
    # or
    hms users seed

Options:
    --dry-run   Show what would be created without writing to database
"""

import asyncio
import logging
import sys
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from hms.application.services import UserService
from hms.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from hms.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_session_maker,
)
from hms_auth import PasswordHashingService
from hms_config.settings import get_settings
from hms_demo.data import DEMO_USERS, DemoUserDef

logger = logging.getLogger(__name__)


@dataclass
class SeedStats:
    """Statistics about what was seeded."""

    skipped: bool
    users_created: int


async def seed_demo_users(
    session: AsyncSession,
    password_service: PasswordHashingService,
    users: list[DemoUserDef] = DEMO_USERS,
) -> int:
    """Insert the demo staff accounts if no user exists yet.

    The caller owns the transaction and must commit.

    Parameters
    ----------
    session
        Database session
    password_service
        Hashing service used for the demo passwords
    users
        Account definitions to insert

    Returns
    -------
    Number of accounts created (0 when the table already had users)
    """
    user_repo = UserRepositorySQLAlchemy(session)

    existing = await user_repo.count()
    if existing > 0:
        logger.info("User table already has %d user(s), skipping demo seed", existing)
        return 0

    user_service = UserService(
        user_repository=user_repo,
        password_service=password_service,
    )
    for demo in users:
        await user_service.create_user(
            username=demo.username,
            password=demo.password,
            role=demo.role,
            name=demo.name,
            email=demo.email,
            phone=demo.phone,
        )
        logger.debug("Demo user created: %s", demo.username)

    logger.info("Created %d demo user(s)", len(users))
    return len(users)


async def seed_demo_data(dry_run: bool = False) -> SeedStats:
    """Main seeding function.

    Parameters
    ----------
    dry_run
        Show what would be created without writing

    Returns
    -------
    Statistics about what was seeded
    """
    if dry_run:
        logger.info("DRY RUN - no data will be written")
        for demo in DEMO_USERS:
            logger.info("  %s (%s)", demo.username, demo.role.value)
        return SeedStats(skipped=False, users_created=len(DEMO_USERS))

    await create_tables()

    settings = get_settings()
    password_service = PasswordHashingService(rounds=settings.bcrypt_rounds)

    async with get_session_maker()() as session:
        created = await seed_demo_users(session, password_service)
        await session.commit()
    await get_engine().dispose()

    if created:
        logger.info("=" * 50)
        logger.info("Demo data seeding complete!")
        logger.info("=" * 50)
        for demo in DEMO_USERS:
            logger.info("  %-12s %s", demo.username, demo.password)
        logger.info("=" * 50)

    return SeedStats(skipped=created == 0, users_created=created)


def main():
    """CLI entry point."""
    dry_run = "--dry-run" in sys.argv or "-n" in sys.argv

    if "--help" in sys.argv or "-h" in sys.argv:
        print(__doc__)
        sys.exit(0)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    logger.info("HMS Demo Data Seeder")
    logger.info("=" * 50)

    settings = get_settings()
    db_url = settings.database_url
    db_display = db_url.split("@")[-1] if "@" in db_url else db_url
    logger.info("Database: %s", db_display)

    asyncio.run(seed_demo_data(dry_run=dry_run))


if __name__ == "__main__":
    main()
