# models/profile.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator


class ProfileRead(BaseModel):
    """Row of the `profiles` table, keyed by the Supabase Auth user id."""

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: str
    approved: bool = False
    created_at: Optional[datetime] = None

    # Parse trailing Z timestamps
    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v


class RoleUpdate(BaseModel):
    role: str
