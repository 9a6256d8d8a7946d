"""
schemas/auth.py
---------------
Pydantic models for operator registration, login, token refresh and
profile responses.

Naming convention:
  *Request   → inbound request body
  *Read      → outbound profile (hashed_password is never part of it)
  *Response  → outbound envelope

Token responses are shared with the marketplace endpoints.
"""

from datetime import datetime
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field, field_validator

from cernio.schemas.tenant import TenantRead


def _check_email(value: str) -> str:
    # Format check only: the address is stored and matched exactly as given,
    # so the normalised form email-validator computes is discarded.
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    return value


ExactEmail = Annotated[str, Field(max_length=320), AfterValidator(_check_email)]


class RegisterRequest(BaseModel):
    company_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        examples=["Acme Demolition"],
        description="Name of the company (tenant) being onboarded",
    )
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: ExactEmail
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("company_name", "first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        return v.strip()


class LoginRequest(BaseModel):
    email: ExactEmail
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class UserRead(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    tenant_id: str
    tenant: TenantRead
    created_at: datetime

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # access token lifetime, seconds


class AuthResponse(TokenResponse):
    user: UserRead


class LogoutResponse(BaseModel):
    message: str


class EmailAvailability(BaseModel):
    available: bool
