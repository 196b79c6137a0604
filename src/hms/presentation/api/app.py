"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hms.application.services import UserService
from hms.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from hms.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_session_maker,
)
from hms.presentation.api.exception_handlers import setup_exception_handlers
from hms.presentation.api.routers import auth_router, users_router
from hms_auth import PasswordHashingService
from hms_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the hms application with:
    - Console output with timestamps and module names
    - Configurable log level for hms modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("hms").setLevel(log_level)
    logging.getLogger("hms_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Staff login.

**Login:**
- Identify with an email address or a username (email is tried first)
- Receive an opaque session token and your public profile

**Security:**
- Passwords are stored and verified as bcrypt hashes only
- Unknown accounts and wrong passwords return the same 401 response
- Tokens carry no account data and are not stored server-side
""",
    },
    {
        "name": "Users",
        "description": """Staff account administration.

**Roles:**
- `DOCTOR`, `NURSE`, `RECEPTIONIST`, `ADMINISTRATOR`, `PHARMACIST`

Usernames and email addresses are unique. Responses never contain
password hashes.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting HMS API v%s...", API_VERSION)
    logger.info("Database backend: %s", settings.database_type)
    engine = get_engine()
    await _init_database_schema()
    await _prepare_user_store(settings)
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down HMS API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema() -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    try:
        await create_tables()
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


async def _prepare_user_store(settings: Settings) -> None:
    """Bring stored credentials up to date and optionally seed demo staff.

    Accounts created before passwords were hashed cannot log in, so any
    plaintext secret is re-hashed here.
    """
    password_service = PasswordHashingService(rounds=settings.bcrypt_rounds)

    async with get_session_maker()() as session:
        user_service = UserService(
            user_repository=UserRepositorySQLAlchemy(session),
            password_service=password_service,
        )
        await user_service.migrate_plaintext_passwords()

        if settings.seed_demo_users:
            # hms_demo is not shipped in production images
            from hms_demo.seed import seed_demo_users

            await seed_demo_users(session, password_service)

        await session.commit()


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter()

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(users_router, prefix="/users", tags=["Users"])

    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description="Staff authentication and account administration.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "users": f"{API_V1_PREFIX}/users",
            },
        }

    return app


# Application instance for uvicorn
app = create_app()
