# models/showing.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ShowingCreate(BaseModel):
    title: str
    description: Optional[str] = None
    property_id: Optional[str] = None
    showing_time: Optional[datetime] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None


class ShowingUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    property_id: Optional[str] = None
    showing_time: Optional[datetime] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
