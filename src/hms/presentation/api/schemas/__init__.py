"""Pydantic schemas for API request/response models."""

from hms.presentation.api.schemas.auth import (
    IdentityResponse,
    LoginRequest,
    LoginResponse,
)
from hms.presentation.api.schemas.common import (
    ErrorResponse,
    MessageResponse,
)
from hms.presentation.api.schemas.users import (
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    # Auth
    "IdentityResponse",
    "LoginRequest",
    "LoginResponse",
    # Common
    "ErrorResponse",
    "MessageResponse",
    # Users
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
