# routers/appointments.py

from typing import Optional

from fastapi import APIRouter, Depends

from core.permission_helpers import AccessContext
from core.record_helpers import (
    create_owned,
    get_visible_or_404,
    list_visible,
    update_or_404,
)
from dependencies.auth import get_access_context, requires_permission
from models.appointment import AppointmentCreate, AppointmentUpdate
from models.enums import AppointmentStatus


RESOURCE = "appointments"

router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"],
)


# ============================================================
# LIST APPOINTMENTS (optionally by status)
# ============================================================
@router.get("", summary="List Appointments")
def list_appointments(
    status: Optional[AppointmentStatus] = None,
    context: AccessContext = Depends(get_access_context),
):
    rows = list_visible(RESOURCE, context, order_by="start_time")
    if status is not None:
        rows = [r for r in rows if r.get("status") == status.value]
    return {"success": True, "data": rows}


@router.get("/{appointment_id}", summary="Get Appointment")
def get_appointment(appointment_id: str, context: AccessContext = Depends(get_access_context)):
    return get_visible_or_404(RESOURCE, appointment_id, context)


@router.post("", status_code=201, summary="Create Appointment")
def create_appointment(
    payload: AppointmentCreate,
    context: AccessContext = Depends(requires_permission("appointments.create")),
):
    return create_owned(RESOURCE, payload.model_dump(mode="json"), context)


@router.patch("/{appointment_id}", summary="Update Appointment")
def update_appointment(
    appointment_id: str,
    payload: AppointmentUpdate,
    context: AccessContext = Depends(requires_permission("appointments.edit")),
):
    changes = payload.model_dump(mode="json", exclude_unset=True)
    return update_or_404(RESOURCE, appointment_id, changes, context)
