"""User management schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hms.domain.user import UserRole


class UserCreateRequest(BaseModel):
    """Request schema for creating a staff account."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="Password (8-72 characters)",
    )
    role: UserRole
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "doctor",
                "password": "doctor123",
                "role": "DOCTOR",
                "name": "Dr. John Smith",
                "email": "doctor@hospital.com",
                "phone": "+1-555-0002",
            },
        },
    )


class UserUpdateRequest(BaseModel):
    """Request schema for updating a staff account.

    Leave ``password`` empty or out to keep the current one.
    """

    username: str = Field(..., min_length=1, max_length=100)
    password: str | None = None
    role: UserRole
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)


class UserResponse(BaseModel):
    """Response schema for user data. Never carries the password hash."""

    id: int
    username: str
    role: UserRole
    name: str
    email: str | None
    phone: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
