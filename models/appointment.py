# models/appointment.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from models.enums import AppointmentStatus


class AppointmentCreate(BaseModel):
    title: str
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    estimated_duration_minutes: Optional[int] = None
    status: AppointmentStatus = AppointmentStatus.scheduled
    location_id: Optional[str] = None
    unit_id: Optional[str] = None
    purpose: Optional[str] = None
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    estimated_duration_minutes: Optional[int] = None
    status: Optional[AppointmentStatus] = None
    location_id: Optional[str] = None
    unit_id: Optional[str] = None
    purpose: Optional[str] = None
    notes: Optional[str] = None
    work_summary: Optional[str] = None
    next_destination: Optional[str] = None
