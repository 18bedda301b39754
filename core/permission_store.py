# core/permission_store.py

from typing import List, Optional

from core.errors import PersistenceError, extract_supabase_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.enums import ToggleAction
from models.permission import (
    PermissionDefinition,
    RolePermission,
    ToggleIntent,
    UserPermission,
)


# =================================================================
#  PERMISSION TABLES
# =================================================================
#   permissions       (code, description)
#   role_permissions  (role, permission_code, allowed)      unique(role, permission_code)
#   user_permissions  (user_id, permission_code, allowed)   unique(user_id, permission_code)
# =================================================================

PERMISSIONS_TABLE = "permissions"
ROLE_PERMISSIONS_TABLE = "role_permissions"
USER_PERMISSIONS_TABLE = "user_permissions"


def _client():
    client = get_supabase_client()
    if not client:
        raise PersistenceError("Supabase client", "not configured")
    return client


def list_permissions() -> List[PermissionDefinition]:
    try:
        result = (
            _client()
            .table(PERMISSIONS_TABLE)
            .select("code, description")
            .order("code")
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to load permissions", extract_supabase_error(e))

    return [PermissionDefinition(**row) for row in (result.data or [])]


def list_role_defaults() -> List[RolePermission]:
    try:
        result = (
            _client()
            .table(ROLE_PERMISSIONS_TABLE)
            .select("role, permission_code, allowed")
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to load role permissions", extract_supabase_error(e))

    return [RolePermission(**row) for row in (result.data or [])]


def list_user_overrides(user_id: Optional[str] = None) -> List[UserPermission]:
    """All overrides, or only one user's when `user_id` is given."""
    try:
        query = (
            _client()
            .table(USER_PERMISSIONS_TABLE)
            .select("user_id, permission_code, allowed")
        )
        if user_id:
            query = query.eq("user_id", user_id)
        result = query.execute()
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to load user permissions", extract_supabase_error(e))

    return [UserPermission(**row) for row in (result.data or [])]


def apply_toggle(intent: ToggleIntent) -> UserPermission:
    """
    Execute a planned toggle as a single-row write.

    Concurrent toggles of the same cell are last-write-wins.
    Raises PersistenceError on any failure; nothing is retried.
    """
    client = _client()
    override = intent.as_override()

    try:
        if intent.action == ToggleAction.update:
            (
                client.table(USER_PERMISSIONS_TABLE)
                .update({"allowed": intent.allowed})
                .eq("user_id", intent.user_id)
                .eq("permission_code", intent.permission_code)
                .execute()
            )
        else:
            (
                client.table(USER_PERMISSIONS_TABLE)
                .insert(override.model_dump())
                .execute()
            )
    except Exception as e:
        detail = extract_supabase_error(e)
        logger.error(
            f"Permission toggle failed ({intent.action}) "
            f"user={intent.user_id} code={intent.permission_code}: {detail}"
        )
        raise PersistenceError("Failed to save permission override", detail)

    logger.info(
        f"Permission override {intent.action}: "
        f"user={intent.user_id} code={intent.permission_code} allowed={intent.allowed}"
    )
    return override


def upsert_user_override(user_id: str, permission_code: str, allowed: bool) -> UserPermission:
    override = UserPermission(user_id=user_id, permission_code=permission_code, allowed=allowed)

    try:
        (
            _client()
            .table(USER_PERMISSIONS_TABLE)
            .upsert(override.model_dump(), on_conflict="user_id,permission_code")
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to save permission override", extract_supabase_error(e))

    return override


def upsert_role_defaults(rows: List[dict]) -> int:
    """Seed/refresh role defaults. Returns the number of rows written."""
    if not rows:
        return 0

    try:
        (
            _client()
            .table(ROLE_PERMISSIONS_TABLE)
            .upsert(rows, on_conflict="role,permission_code")
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to seed role permissions", extract_supabase_error(e))

    return len(rows)


def upsert_permissions(catalog: dict) -> int:
    """Seed/refresh the catalog from a code → description mapping."""
    rows = [{"code": code, "description": desc} for code, desc in sorted(catalog.items())]
    if not rows:
        return 0

    try:
        (
            _client()
            .table(PERMISSIONS_TABLE)
            .upsert(rows, on_conflict="code")
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to seed permissions", extract_supabase_error(e))

    return len(rows)
