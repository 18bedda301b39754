# routers/court_dates.py

from fastapi import APIRouter, Depends

from core.permission_helpers import AccessContext
from core.record_helpers import (
    create_owned,
    get_visible_or_404,
    list_visible,
    update_or_404,
)
from dependencies.auth import get_access_context, requires_permission
from models.court_date import CourtDateCreate, CourtDateUpdate


RESOURCE = "court_dates"

router = APIRouter(
    prefix="/court-dates",
    tags=["Court Dates"],
)


@router.get("", summary="List Court Dates (by court time)")
def list_court_dates(context: AccessContext = Depends(get_access_context)):
    rows = list_visible(RESOURCE, context, order_by="court_time")
    return {"success": True, "data": rows}


@router.get("/{court_date_id}", summary="Get Court Date")
def get_court_date(court_date_id: str, context: AccessContext = Depends(get_access_context)):
    return get_visible_or_404(RESOURCE, court_date_id, context)


@router.post("", status_code=201, summary="Create Court Date")
def create_court_date(
    payload: CourtDateCreate,
    context: AccessContext = Depends(requires_permission("court_dates.create")),
):
    return create_owned(RESOURCE, payload.model_dump(mode="json"), context)


@router.patch("/{court_date_id}", summary="Update Court Date")
def update_court_date(
    court_date_id: str,
    payload: CourtDateUpdate,
    context: AccessContext = Depends(requires_permission("court_dates.edit")),
):
    changes = payload.model_dump(mode="json", exclude_unset=True)
    return update_or_404(RESOURCE, court_date_id, changes, context)
