"""
schemas/tenant.py
-----------------
Outbound tenant (company) summary, embedded in operator profiles.
"""

from pydantic import BaseModel


class TenantRead(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}
