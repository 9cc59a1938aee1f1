# catalog_api/schemas/admin.py
from typing import Any

from pydantic import ConfigDict, EmailStr, Field

from catalog_api.schemas.product import CamelModel


class LoginRequest(CamelModel):
    model_config = ConfigDict(extra="ignore")

    email: str
    password: str


class TokenResponse(CamelModel):
    token: str
    message: str


class VerifyResponse(CamelModel):
    valid: bool
    user: dict[str, Any]


class ChangePasswordRequest(CamelModel):
    """Body: {currentPassword, newPassword}."""

    model_config = ConfigDict(extra="forbid")

    current_password: str
    new_password: str = Field(max_length=128)


class ChangeEmailRequest(CamelModel):
    """Body: {currentPassword, newEmail}."""

    model_config = ConfigDict(extra="forbid")

    current_password: str
    new_email: EmailStr


class MessageResponse(CamelModel):
    message: str


class HealthResponse(CamelModel):
    status: str
    database: str
    timestamp: str
