# catalog_api/core/auth.py
import logging
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from catalog_api.core.tokens import TokenInvalid, TokenService

logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can answer with our own 401 message.
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """FastAPI dependency returning the token service attached to the app."""
    return request.app.state.tokens


def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> dict[str, Any]:
    """
    Authorization gate for every /admin route except login.

    Flow:
      1. No bearer token => 401.
      2. Signature / expiry check fails => 403.
      3. Otherwise the verified claims are attached to request.state.admin
         and returned to the handler.

    Raises:
        HTTPException(401): missing token.
        HTTPException(403): invalid or expired token.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = tokens.verify(credentials.credentials)
    if isinstance(result, TokenInvalid):
        logger.info(f"Rejected admin token: {result.reason}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        )

    request.state.admin = result.claims
    return result.claims
