# models/court_date.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class CourtDateCreate(BaseModel):
    title: str
    description: Optional[str] = None
    court_name: Optional[str] = None
    courtroom: Optional[str] = None
    court_time: Optional[datetime] = None
    related_unit: Optional[str] = None


class CourtDateUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    court_name: Optional[str] = None
    courtroom: Optional[str] = None
    court_time: Optional[datetime] = None
    related_unit: Optional[str] = None
