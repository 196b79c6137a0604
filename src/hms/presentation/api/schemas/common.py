"""Common schemas shared across API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "Invalid username/email or password",
                "code": "INVALID_CREDENTIALS",
            },
        },
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
