# routers/work_orders.py

from fastapi import APIRouter, Depends

from core.permission_helpers import AccessContext
from core.record_helpers import (
    create_owned,
    get_visible_or_404,
    list_visible,
    update_or_404,
)
from dependencies.auth import get_access_context, requires_permission
from models.enums import WorkOrderStatus
from models.work_order import WorkOrderCreate, WorkOrderStatusUpdate, WorkOrderUpdate


RESOURCE = "work_orders"

router = APIRouter(
    prefix="/work-orders",
    tags=["Work Orders"],
)


# ============================================================
# LIST WORK ORDERS
# ============================================================
@router.get(
    "",
    summary="List Work Orders",
    description="""
    Newest first. `work_orders.view_all` returns every row,
    `work_orders.view_own` only rows assigned to the caller,
    neither returns an empty list.
    """,
)
def list_work_orders(context: AccessContext = Depends(get_access_context)):
    rows = list_visible(RESOURCE, context, order_by="created_at", desc=True)
    return {"success": True, "data": rows}


# ============================================================
# GET WORK ORDER
# ============================================================
@router.get("/{work_order_id}", summary="Get Work Order")
def get_work_order(work_order_id: str, context: AccessContext = Depends(get_access_context)):
    return get_visible_or_404(RESOURCE, work_order_id, context)


# ============================================================
# CREATE WORK ORDER
# ============================================================
@router.post("", status_code=201, summary="Create Work Order")
def create_work_order(
    payload: WorkOrderCreate,
    # edit holders may also open work orders
    context: AccessContext = Depends(requires_permission("work_orders.create", "work_orders.edit")),
):
    data = payload.model_dump(mode="json")
    data["status"] = WorkOrderStatus.open.value
    return create_owned(RESOURCE, data, context)


# ============================================================
# UPDATE WORK ORDER
# ============================================================
@router.patch("/{work_order_id}", summary="Update Work Order")
def update_work_order(
    work_order_id: str,
    payload: WorkOrderUpdate,
    context: AccessContext = Depends(requires_permission("work_orders.edit")),
):
    changes = payload.model_dump(mode="json", exclude_unset=True)
    return update_or_404(RESOURCE, work_order_id, changes, context)


# ============================================================
# CHANGE STATUS
# ============================================================
@router.patch("/{work_order_id}/status", summary="Change Work Order status")
def update_work_order_status(
    work_order_id: str,
    payload: WorkOrderStatusUpdate,
    context: AccessContext = Depends(requires_permission("work_orders.edit")),
):
    return update_or_404(RESOURCE, work_order_id, {"status": payload.status.value}, context)
