"""
schemas/marketplace_auth.py
---------------------------
Pydantic models for marketplace customer accounts.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from cernio.schemas.auth import ExactEmail, TokenResponse


class MarketplaceRegisterRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: ExactEmail
    password: str = Field(..., min_length=8, max_length=72)
    phone: Optional[str] = Field(default=None, max_length=32)


class MarketplaceUserRead(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class MarketplaceAuthResponse(TokenResponse):
    user: MarketplaceUserRead
