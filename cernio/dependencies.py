"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication.

Flow:
  1. OAuth2PasswordBearer extracts the Bearer token from the Authorization header.
  2. decode_access_token validates signature and expiry (no DB round-trip).
  3. The token's `type` claim must match the principal kind the endpoint
     serves, so marketplace tokens never open operator endpoints and
     vice versa.
  4. validate_by_id re-loads the principal so deleted or deactivated
     accounts are rejected even while their access token is still valid.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from cernio.core.config import settings
from cernio.core.logging import get_logger
from cernio.core.security import decode_access_token
from cernio.db.session import get_db
from cernio.models.marketplace_user import MarketplaceUser
from cernio.models.user import User
from cernio.services.auth_service import auth_service
from cernio.services.marketplace_auth_service import marketplace_auth_service
from cernio.services.session_authority import SessionAuthority

logger = get_logger(__name__)

# tokenUrl must match the login endpoint path
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    scheme_name="OperatorBearer",
)
marketplace_oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/marketplace-auth/login",
    scheme_name="MarketplaceBearer",
)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def _resolve_principal(
    token: str, db: AsyncSession, authority: SessionAuthority
):
    try:
        payload = decode_access_token(token)
    except JWTError as exc:
        logger.warning("JWT decode failed", error=str(exc))
        raise _CREDENTIALS_EXCEPTION

    principal_id = payload.get("sub")
    if not principal_id or payload.get("type") != authority.kind.name:
        logger.warning("Access token rejected", expected_kind=authority.kind.name)
        raise _CREDENTIALS_EXCEPTION

    principal = await authority.validate_by_id(db, principal_id)
    if principal is None:
        logger.warning("Principal from valid JWT is gone or inactive", principal_id=principal_id)
        raise _CREDENTIALS_EXCEPTION
    return principal


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    return await _resolve_principal(token, db, auth_service)


async def get_current_marketplace_user(
    token: Annotated[str, Depends(marketplace_oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MarketplaceUser:
    return await _resolve_principal(token, db, marketplace_auth_service)
