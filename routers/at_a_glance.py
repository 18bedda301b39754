# routers/at_a_glance.py

from fastapi import APIRouter, Depends

from core.permission_helpers import AccessContext, visibility_scope
from core.record_helpers import list_visible
from dependencies.auth import get_access_context


router = APIRouter(
    prefix="/at-a-glance",
    tags=["At a Glance"],
)


# -----------------------------------------------------
# Summary columns per section
# -----------------------------------------------------
SECTIONS = {
    "showings": "id, title, showing_time, contact_name, assigned_to",
    "inspections": "id, title, inspection_time, inspector_name, assigned_to",
    "court_dates": "id, title, court_time, court_name, assigned_to",
    "appointments": "id, title, start_time, assigned_to",
    "work_orders": "id, title, status, property_id, assigned_to, created_at",
}


@router.get(
    "",
    summary="Everything on my plate",
    description="Each section is filtered on its own view_all / view_own permissions.",
)
def at_a_glance(context: AccessContext = Depends(get_access_context)):
    sections = {}
    for resource, columns in SECTIONS.items():
        rows = list_visible(resource, context, columns=columns)
        sections[resource] = {
            "scope": visibility_scope(resource, context).value,
            "count": len(rows),
            "data": rows,
        }

    return {"success": True, "sections": sections}
