# catalog_api/routers/admin.py
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from catalog_api.core.auth import get_token_service, require_admin
from catalog_api.core.credentials import AdminCredentialStore, get_credential_store
from catalog_api.core.tokens import TokenService
from catalog_api.schemas.admin import (
    ChangeEmailRequest,
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    TokenResponse,
    VerifyResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    credentials: AdminCredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Exchange admin email + password for a 24h bearer token.

    Raises:
        HTTPException(401): wrong email or password (same message for both).
    """
    if not credentials.verify_login(payload.email, payload.password):
        logger.info("Failed admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token = tokens.issue({"email": credentials.email})
    return {"token": token, "message": "Login successful"}


@router.get("/verify", response_model=VerifyResponse)
def verify(admin: dict[str, Any] = Depends(require_admin)):
    """Confirm the bearer token is valid and echo its claims."""
    return {"valid": True, "user": admin}


@router.post(
    "/change-password",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def change_password(
    payload: ChangePasswordRequest,
    credentials: AdminCredentialStore = Depends(get_credential_store),
):
    """
    Change the admin password (in memory; reset on restart).
    """
    credentials.change_password(payload.current_password, payload.new_password)
    logger.info("Admin password changed")
    return {"message": "Password changed successfully"}


@router.post(
    "/change-email",
    response_model=TokenResponse,
    dependencies=[Depends(require_admin)],
)
def change_email(
    payload: ChangeEmailRequest,
    credentials: AdminCredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Change the admin email (in memory; reset on restart).

    Returns a fresh token carrying the new email.
    """
    credentials.change_email(payload.current_password, str(payload.new_email))
    logger.info("Admin email changed")
    token = tokens.issue({"email": credentials.email})
    return {"token": token, "message": "Email changed successfully"}
