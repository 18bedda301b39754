# routers/permissions.py

from fastapi import APIRouter, Depends

from core.permission_helpers import AccessContext, visibility_scope
from core.permissions import GATED_RESOURCES, PERMISSION_CATALOG
from dependencies.auth import CurrentUser, get_access_context, get_approved_user
from models.permission import PermissionCell, PermissionDefinition


router = APIRouter(
    prefix="/permissions",
    tags=["Permissions"],
)


# -----------------------------------------------------
# GET /permissions: catalog
# -----------------------------------------------------
@router.get("", response_model=list[PermissionDefinition], summary="Permission catalog")
def list_catalog(current_user: CurrentUser = Depends(get_approved_user)):
    return [
        PermissionDefinition(code=code, description=desc)
        for code, desc in sorted(PERMISSION_CATALOG.items())
    ]


# -----------------------------------------------------
# GET /permissions/me: what the caller can do
# -----------------------------------------------------
@router.get("/me", summary="My effective permissions")
def my_permissions(context: AccessContext = Depends(get_access_context)):
    cells = []
    for code, desc in sorted(PERMISSION_CATALOG.items()):
        effective = context.resolve(code)
        cells.append(PermissionCell(
            permission_code=code,
            description=desc,
            allowed=effective.allowed,
            source=effective.source,
        ))

    return {
        "user_id": context.user_id,
        "role": context.role,
        "permissions": [c.model_dump(mode="json") for c in cells],
        "visibility": {
            resource: visibility_scope(resource, context).value
            for resource in GATED_RESOURCES
        },
    }
