"""HMS Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the hospital domain. It handles:
- Password hashing and verification (bcrypt)
- Opaque session token issuance
- The authentication error kinds shared by every caller

Architecture:
    hms_auth/
    ├── services/           # Pure logic (password hashing, session tokens)
    └── exceptions.py       # Auth exceptions

Usage:
    from hms_auth import PasswordHashingService, SessionTokenService
"""

from hms_auth.exceptions import (
    AuthError,
    DependencyFailureError,
    InvalidCredentialsError,
    MalformedRequestError,
    WeakPasswordError,
)
from hms_auth.services import PasswordHashingService, SessionTokenService

__all__ = [
    # Services
    "PasswordHashingService",
    "SessionTokenService",
    # Exceptions
    "AuthError",
    "DependencyFailureError",
    "InvalidCredentialsError",
    "MalformedRequestError",
    "WeakPasswordError",
]
