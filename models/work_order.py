# models/work_order.py

from typing import Optional
from pydantic import BaseModel

from models.enums import WorkOrderPriority, WorkOrderStatus


class WorkOrderCreate(BaseModel):
    title: str
    description: Optional[str] = None
    property_id: Optional[str] = None
    unit: Optional[str] = None
    priority: WorkOrderPriority = WorkOrderPriority.normal


class WorkOrderUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    property_id: Optional[str] = None
    unit: Optional[str] = None
    priority: Optional[WorkOrderPriority] = None
    status: Optional[WorkOrderStatus] = None


class WorkOrderStatusUpdate(BaseModel):
    status: WorkOrderStatus
