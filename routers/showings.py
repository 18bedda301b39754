# routers/showings.py

from fastapi import APIRouter, Depends

from core.permission_helpers import AccessContext
from core.record_helpers import (
    create_owned,
    get_visible_or_404,
    list_visible,
    update_or_404,
)
from dependencies.auth import get_access_context, requires_permission
from models.showing import ShowingCreate, ShowingUpdate


RESOURCE = "showings"

router = APIRouter(
    prefix="/showings",
    tags=["Showings"],
)


@router.get("", summary="List Showings (by showing time)")
def list_showings(context: AccessContext = Depends(get_access_context)):
    rows = list_visible(RESOURCE, context, order_by="showing_time")
    return {"success": True, "data": rows}


@router.get("/{showing_id}", summary="Get Showing")
def get_showing(showing_id: str, context: AccessContext = Depends(get_access_context)):
    return get_visible_or_404(RESOURCE, showing_id, context)


@router.post("", status_code=201, summary="Create Showing")
def create_showing(
    payload: ShowingCreate,
    context: AccessContext = Depends(requires_permission("showings.create")),
):
    return create_owned(RESOURCE, payload.model_dump(mode="json"), context)


@router.patch("/{showing_id}", summary="Update Showing")
def update_showing(
    showing_id: str,
    payload: ShowingUpdate,
    context: AccessContext = Depends(requires_permission("showings.edit")),
):
    changes = payload.model_dump(mode="json", exclude_unset=True)
    return update_or_404(RESOURCE, showing_id, changes, context)
