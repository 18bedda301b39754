# models/inspection.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from models.enums import InspectionType


class InspectionCreate(BaseModel):
    title: Optional[str] = None
    inspector_name: Optional[str] = None
    inspection_type: InspectionType = InspectionType.first
    property_name: Optional[str] = None
    unit_number: Optional[str] = None
    tenant_name: Optional[str] = None
    tenant_phone: Optional[str] = None
    inspection_time: Optional[datetime] = None
    notes: Optional[str] = None


class InspectionUpdate(BaseModel):
    title: Optional[str] = None
    inspector_name: Optional[str] = None
    inspection_type: Optional[InspectionType] = None
    property_name: Optional[str] = None
    unit_number: Optional[str] = None
    tenant_name: Optional[str] = None
    tenant_phone: Optional[str] = None
    inspection_time: Optional[datetime] = None
    notes: Optional[str] = None
