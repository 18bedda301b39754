from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from supabase import Client

from core.errors import PersistenceError, handle_supabase_error
from core.logging_config import logger
from core.permission_helpers import AccessContext, PermissionIndex
from core.permission_store import list_role_defaults, list_user_overrides
from core.permissions import PERMISSION_CODES, SUPER_ADMIN_ROLE
from core.profile_store import get_profile
from core.supabase_client import get_supabase_client


bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# Current User Model (auth identity + profile row)
# ============================================================
class CurrentUser(BaseModel):
    id: str                         # Supabase Auth UID == profiles.id
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: str
    approved: bool = False


# ============================================================
# AUTH DECODING (Supabase: validates JWT + loads profile)
# ============================================================
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or not credentials.credentials:
        raise unauthorized

    client: Client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(credentials.credentials)
    except Exception:
        raise unauthorized

    auth_user = getattr(auth_resp, "user", None) if auth_resp else None
    if not auth_user:
        raise unauthorized

    # ---------------------------------------------------------
    # Load profile (role + approval live here, not in metadata)
    # ---------------------------------------------------------
    try:
        profile = get_profile(auth_user.id)
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to load profile")

    if profile is None:
        raise HTTPException(403, "No profile found for this account")

    return CurrentUser(
        id=profile.id,
        email=profile.email or auth_user.email,
        full_name=profile.full_name,
        role=profile.role,
        approved=profile.approved,
    )


# ============================================================
# APPROVAL GATE (unapproved accounts see nothing)
# ============================================================
def get_approved_user(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current_user.approved:
        raise HTTPException(403, "Account pending approval")
    return current_user


# ============================================================
# ACCESS CONTEXT (role defaults + overrides, loaded per request)
# ============================================================
def get_access_context(current_user: CurrentUser = Depends(get_approved_user)) -> AccessContext:
    try:
        role_defaults = list_role_defaults()
        user_overrides = list_user_overrides(current_user.id)
    except PersistenceError as e:
        raise handle_supabase_error(e, "Failed to load permissions")

    index = PermissionIndex(role_defaults, user_overrides, known_codes=PERMISSION_CODES)
    return AccessContext(
        user_id=current_user.id,
        role=current_user.role,
        index=index,
        approved=current_user.approved,
    )


# ============================================================
# PERMISSION CHECK (any of the given codes)
# ============================================================
def requires_permission(*codes: str):
    """
    Usage:
        @router.post("", dependencies=[Depends(requires_permission("showings.create"))])

    Passing several codes allows the request when any one resolves to allowed.
    """
    if not codes:
        raise ValueError("requires_permission needs at least one code")

    def dependency(context: AccessContext = Depends(get_access_context)) -> AccessContext:
        if not any(context.can(code) for code in codes):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{' or '.join(codes)}' required",
            )
        return context

    return dependency


# ============================================================
# SUPER ADMIN GUARD (admin users screen)
# ============================================================
def require_super_admin(current_user: CurrentUser = Depends(get_approved_user)) -> CurrentUser:
    if current_user.role != SUPER_ADMIN_ROLE:
        logger.warning(f"User {current_user.id} ({current_user.role}) denied admin access")
        raise HTTPException(403, "Super admin role required")
    return current_user
