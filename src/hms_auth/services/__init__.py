"""Authentication services (pure logic, no persistence)."""

from hms_auth.services.password_service import PasswordHashingService
from hms_auth.services.session_token_service import SessionTokenService

__all__ = [
    "PasswordHashingService",
    "SessionTokenService",
]
