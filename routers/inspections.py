# routers/inspections.py

from fastapi import APIRouter, Depends

from core.permission_helpers import AccessContext
from core.record_helpers import (
    create_owned,
    get_visible_or_404,
    list_visible,
    update_or_404,
)
from dependencies.auth import get_access_context, requires_permission
from models.inspection import InspectionCreate, InspectionUpdate


RESOURCE = "inspections"

router = APIRouter(
    prefix="/inspections",
    tags=["Inspections"],
)


@router.get("", summary="List Inspections (by inspection time)")
def list_inspections(context: AccessContext = Depends(get_access_context)):
    rows = list_visible(RESOURCE, context, order_by="inspection_time")
    return {"success": True, "data": rows}


@router.get("/{inspection_id}", summary="Get Inspection")
def get_inspection(inspection_id: str, context: AccessContext = Depends(get_access_context)):
    return get_visible_or_404(RESOURCE, inspection_id, context)


@router.post("", status_code=201, summary="Create Inspection")
def create_inspection(
    payload: InspectionCreate,
    context: AccessContext = Depends(requires_permission("inspections.create")),
):
    return create_owned(RESOURCE, payload.model_dump(mode="json"), context)


@router.patch("/{inspection_id}", summary="Update Inspection")
def update_inspection(
    inspection_id: str,
    payload: InspectionUpdate,
    context: AccessContext = Depends(requires_permission("inspections.edit")),
):
    changes = payload.model_dump(mode="json", exclude_unset=True)
    return update_or_404(RESOURCE, inspection_id, changes, context)
