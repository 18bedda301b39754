# models/permission.py

from typing import Optional
from pydantic import BaseModel, ConfigDict

from models.enums import PermissionSource, ToggleAction


# -------------------------------------------------
# Catalog entry (permissions table)
# -------------------------------------------------
class PermissionDefinition(BaseModel):
    code: str
    description: Optional[str] = None


# -------------------------------------------------
# Role default (role_permissions table)
# -------------------------------------------------
class RolePermission(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    permission_code: str
    allowed: bool


# -------------------------------------------------
# User override (user_permissions table)
# -------------------------------------------------
class UserPermission(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    permission_code: str
    allowed: bool


# -------------------------------------------------
# Resolver output
# -------------------------------------------------
class EffectivePermission(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    source: PermissionSource


DENIED = EffectivePermission(allowed=False, source=PermissionSource.none)


# -------------------------------------------------
# Toggle
# -------------------------------------------------
class ToggleIntent(BaseModel):
    """
    The single-row write a toggle needs:
      • insert: no override existed; new row is always allowed=True
      • update: flip the existing override in place
    """
    model_config = ConfigDict(frozen=True)

    action: ToggleAction
    user_id: str
    permission_code: str
    allowed: bool

    def as_override(self) -> UserPermission:
        return UserPermission(
            user_id=self.user_id,
            permission_code=self.permission_code,
            allowed=self.allowed,
        )


class PermissionToggleRequest(BaseModel):
    permission_code: str
    # Value the admin saw in the cell; informational only
    current_allowed: Optional[bool] = None


class PermissionToggleResult(BaseModel):
    action: ToggleAction
    override: UserPermission
    effective: EffectivePermission


# -------------------------------------------------
# Matrix (admin users screen)
# -------------------------------------------------
class PermissionCell(BaseModel):
    permission_code: str
    description: Optional[str] = None
    allowed: bool
    source: PermissionSource


class UserPermissionRow(BaseModel):
    user_id: str
    email: Optional[str] = None
    role: str
    approved: bool
    permissions: list[PermissionCell]
