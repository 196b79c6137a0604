"""Authentication schemas for request/response models."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Request schema for staff login.

    ``identifier`` may be an email address or a username. Older clients
    send ``email`` or ``username`` and ``password``; those names are
    accepted too. Missing values are rejected by the service, not here,
    so they surface as MALFORMED_REQUEST.
    """

    identifier: str | None = Field(
        default=None,
        validation_alias=AliasChoices("identifier", "email", "username"),
        description="Email address or username",
    )
    secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices("secret", "password"),
        description="Password",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "identifier": "doctor@hospital.com",
                "secret": "doctor123",
            },
        },
    )


class IdentityResponse(BaseModel):
    """Secret-free view of the authenticated user."""

    id: int
    username: str
    role: str
    name: str
    email: str | None = None

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Response schema for a successful login."""

    token: str = Field(..., description="Opaque session token")
    user: IdentityResponse
    message: str = "Login successful"

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "Yc2vW0k3h1bq9Xv0o8m1_A",
                "user": {
                    "id": 2,
                    "username": "doctor",
                    "role": "DOCTOR",
                    "name": "Dr. John Smith",
                    "email": "doctor@hospital.com",
                },
                "message": "Login successful",
            },
        },
    )
