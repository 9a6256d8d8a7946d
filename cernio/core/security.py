"""
core/security.py
----------------
Password hashing and JWT token utilities.

Design decisions:
  - bcrypt work factor from settings (10 by default). Hashing and verifying
    are CPU-bound, so the async wrappers push them onto the thread pool.
  - Two token kinds, each signed with its own secret:
      access  → JWT_SECRET,         short-lived, never stored
      refresh → JWT_REFRESH_SECRET, long-lived, also stored as a session row
  - Payload: sub (principal id), email, type (principal kind) and a random
    jti so tokens minted in the same second are still distinct.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from cernio.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


# ── Password Utilities ────────────────────────────────────────────────────────

def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the plain-text password."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison of plain password against stored hash."""
    return pwd_context.verify(plain, hashed)


async def hash_password_async(plain: str) -> str:
    return await run_in_threadpool(hash_password, plain)


async def verify_password_async(plain: str, hashed: str) -> bool:
    return await run_in_threadpool(verify_password, plain, hashed)


# ── JWT Utilities ─────────────────────────────────────────────────────────────

def _encode(
    subject: str,
    email: str,
    token_type: str,
    secret: str,
    expires_delta: timedelta,
) -> str:
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": subject,
        "email": email,
        "type": token_type,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def create_access_token(
    subject: str,
    email: str,
    token_type: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Mint a short-lived access token.

    Args:
        subject: Principal UUID (stored in 'sub' claim).
        email: Principal email at issuance time.
        token_type: Principal kind ('operator' | 'marketplace'); stops a
            marketplace token from being accepted by operator endpoints.
        expires_delta: Optional custom expiry; defaults to settings value.
    """
    return _encode(
        subject,
        email,
        token_type,
        settings.JWT_SECRET,
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(
    subject: str,
    email: str,
    token_type: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Mint a long-lived refresh token signed with the refresh secret."""
    return _encode(
        subject,
        email,
        token_type,
        settings.JWT_REFRESH_SECRET,
        expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Raises:
        JWTError: If the token is invalid, expired, or tampered with.
    """
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])


def decode_refresh_token(token: str) -> Dict[str, Any]:
    """Same as decode_access_token, against the refresh secret."""
    return jwt.decode(
        token, settings.JWT_REFRESH_SECRET, algorithms=[settings.JWT_ALGORITHM]
    )
