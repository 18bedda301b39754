# routers/admin_users.py

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from core.errors import PersistenceError, handle_supabase_error
from core.logging_config import logger
from core.permission_helpers import PermissionIndex, plan_toggle
from core.permission_store import (
    apply_toggle,
    list_permissions,
    list_role_defaults,
    list_user_overrides,
    upsert_user_override,
)
from core.permissions import PERMISSION_CATALOG, PERMISSION_CODES, ROLES
from core.profile_store import get_profile, list_profiles, update_profile
from dependencies.auth import CurrentUser, require_super_admin
from models.permission import (
    PermissionCell,
    PermissionDefinition,
    PermissionToggleRequest,
    PermissionToggleResult,
    UserPermission,
    UserPermissionRow,
)
from models.profile import ProfileRead, RoleUpdate


router = APIRouter(
    prefix="/admin/users",
    tags=["Admin"],
)


class OverrideSet(BaseModel):
    allowed: bool


# -----------------------------------------------------
# Helpers
# -----------------------------------------------------
def _require_known_code(code: str):
    if code not in PERMISSION_CODES:
        raise HTTPException(400, f"Unknown permission code: {code}")


def _require_profile(user_id: str) -> ProfileRead:
    try:
        profile = get_profile(user_id)
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to load user")
    if profile is None:
        raise HTTPException(404, "User not found")
    return profile


def _catalog() -> list:
    """Catalog rows from the database, falling back to the built-in list."""
    try:
        definitions = list_permissions()
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to load permissions")

    if not definitions:
        definitions = [
            PermissionDefinition(code=code, description=desc)
            for code, desc in sorted(PERMISSION_CATALOG.items())
        ]
    return definitions


# -----------------------------------------------------
# LIST USERS
# -----------------------------------------------------
@router.get("", response_model=list[ProfileRead], summary="Admin: list users (newest first)")
def admin_list_users(admin: CurrentUser = Depends(require_super_admin)):
    try:
        return list_profiles()
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to load users")


# -----------------------------------------------------
# PERMISSION MATRIX
# -----------------------------------------------------
@router.get(
    "/permissions",
    response_model=list[UserPermissionRow],
    summary="Admin: effective permissions for every user",
    description="Each cell shows the effective value and whether it came from a user override, the role default, or neither.",
)
def admin_permission_matrix(admin: CurrentUser = Depends(require_super_admin)):
    catalog = _catalog()

    try:
        profiles = list_profiles()
        index = PermissionIndex(
            list_role_defaults(),
            list_user_overrides(),
            known_codes=[p.code for p in catalog],
        )
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to load permissions")

    rows = []
    for profile in profiles:
        cells = []
        for perm in catalog:
            effective = index.resolve(profile.id, profile.role, perm.code)
            cells.append(PermissionCell(
                permission_code=perm.code,
                description=perm.description,
                allowed=effective.allowed,
                source=effective.source,
            ))
        rows.append(UserPermissionRow(
            user_id=profile.id,
            email=profile.email,
            role=profile.role,
            approved=profile.approved,
            permissions=cells,
        ))

    return rows


# -----------------------------------------------------
# APPROVE
# -----------------------------------------------------
@router.patch("/{user_id}/approve", response_model=ProfileRead, summary="Admin: approve a signup")
def admin_approve_user(user_id: str, admin: CurrentUser = Depends(require_super_admin)):
    try:
        profile = update_profile(user_id, {"approved": True})
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to approve user")

    if profile is None:
        raise HTTPException(404, "User not found")

    logger.info(f"User {user_id} approved by {admin.id}")
    return profile


# -----------------------------------------------------
# CHANGE ROLE
# -----------------------------------------------------
@router.patch("/{user_id}/role", response_model=ProfileRead, summary="Admin: change a user's role")
def admin_change_role(
    user_id: str,
    payload: RoleUpdate,
    admin: CurrentUser = Depends(require_super_admin),
):
    if payload.role not in ROLES:
        raise HTTPException(400, f"Invalid role: {payload.role}")

    try:
        profile = update_profile(user_id, {"role": payload.role})
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to change role")

    if profile is None:
        raise HTTPException(404, "User not found")

    logger.info(f"User {user_id} role set to {payload.role} by {admin.id}")
    return profile


# -----------------------------------------------------
# TOGGLE OVERRIDE (permission cell click)
# -----------------------------------------------------
@router.post(
    "/{user_id}/permissions/toggle",
    response_model=PermissionToggleResult,
    summary="Admin: toggle a per-user permission override",
    description="""
    Flips an existing override. When the user has no override for the
    code yet, a new one is created with `allowed = true`.
    """,
)
def admin_toggle_permission(
    user_id: str,
    payload: PermissionToggleRequest,
    admin: CurrentUser = Depends(require_super_admin),
):
    _require_known_code(payload.permission_code)
    profile = _require_profile(user_id)

    try:
        overrides = list_user_overrides(user_id)
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to load user permissions")

    next_overrides, intent = plan_toggle(
        user_id, payload.permission_code, payload.current_allowed, overrides
    )

    try:
        override = apply_toggle(intent)
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to toggle permission")

    # Overrides always win, so the role table is not needed for the new cell value
    effective = PermissionIndex((), next_overrides).resolve(
        user_id, profile.role, payload.permission_code
    )

    logger.info(f"Admin {admin.id} toggled {payload.permission_code} for {user_id}")
    return PermissionToggleResult(action=intent.action, override=override, effective=effective)


# -----------------------------------------------------
# SET OVERRIDE EXPLICITLY
# -----------------------------------------------------
@router.put(
    "/{user_id}/permissions/{permission_code}",
    response_model=UserPermission,
    summary="Admin: set a per-user permission override",
)
def admin_set_permission(
    user_id: str,
    permission_code: str,
    payload: OverrideSet,
    admin: CurrentUser = Depends(require_super_admin),
):
    _require_known_code(permission_code)
    _require_profile(user_id)

    try:
        override = upsert_user_override(user_id, permission_code, payload.allowed)
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to set permission")

    logger.info(f"Admin {admin.id} set {permission_code}={payload.allowed} for {user_id}")
    return override
