"""HMS CLI application using Typer.

This module provides command-line utilities for the HMS backend:
schema creation, demo staff seeding and password migration.
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from hms.application.services import UserService
from hms.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from hms.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_session_maker,
)
from hms_auth import PasswordHashingService
from hms_config.settings import get_settings

app = typer.Typer(
    name="hms",
    help="HMS - Hospital Management System CLI",
    no_args_is_help=True,
)
console = Console()

T = TypeVar("T")


db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

users_app = typer.Typer(
    name="users",
    help="Staff account utilities",
    no_args_is_help=True,
)
app.add_typer(users_app)


def _password_service() -> PasswordHashingService:
    return PasswordHashingService(rounds=get_settings().bcrypt_rounds)


def _run(command: Callable[[], Awaitable[T]]) -> T:
    """Run an async command and close the connection pool before the loop ends."""

    async def _main() -> T:
        try:
            return await command()
        finally:
            await get_engine().dispose()

    return asyncio.run(_main())


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "hms.presentation.api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@db_app.command("init")
def init_db() -> None:
    """Create all missing database tables. Existing data is left alone."""
    _run(create_tables)
    console.print("[bold green]Database schema is up to date[/bold green]")


@users_app.command("seed")
def seed_users() -> None:
    """Create the demo staff accounts if the user table is empty."""
    from hms_demo.data import DEMO_USERS
    from hms_demo.seed import seed_demo_users

    async def _seed() -> int:
        await create_tables()
        async with get_session_maker()() as session:
            created = await seed_demo_users(session, _password_service())
            await session.commit()
        return created

    created = _run(_seed)
    if not created:
        console.print("[yellow]Users already exist, nothing seeded.[/yellow]")
        return

    table = Table(title="Demo staff accounts")
    table.add_column("Username", style="cyan")
    table.add_column("Password")
    table.add_column("Role", style="green")
    table.add_column("Email", style="dim")
    for demo in DEMO_USERS:
        table.add_row(demo.username, demo.password, demo.role.value, demo.email)
    console.print(table)
    console.print(
        "[yellow]⚠  Demo passwords are public. "
        "Never seed them into a production database![/yellow]"
    )


@users_app.command("migrate-passwords")
def migrate_passwords() -> None:
    """Re-hash stored passwords that are not bcrypt hashes yet."""

    async def _migrate() -> int:
        async with get_session_maker()() as session:
            user_service = UserService(
                user_repository=UserRepositorySQLAlchemy(session),
                password_service=_password_service(),
            )
            migrated = await user_service.migrate_plaintext_passwords()
            await session.commit()
        return migrated

    migrated = _run(_migrate)
    if migrated:
        console.print(
            f"[bold green]Migrated {migrated} password(s) to bcrypt[/bold green]"
        )
    else:
        console.print("[dim]All stored passwords are already hashed.[/dim]")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
