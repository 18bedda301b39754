# core/permission_helpers.py

"""
Effective-permission resolution and record visibility.

Two tiers decide every check:
  • user override  (user_permissions: user_id + permission_code)
  • role default   (role_permissions: role + permission_code)
The override always wins; with neither row the answer is deny.

Nothing in this module performs I/O or raises for a denied permission.
Denial is always `allowed=False`.
"""

from typing import Any, Callable, Iterable, List, Optional, Tuple

from models.enums import PermissionSource, ToggleAction, VisibilityScope
from models.permission import (
    DENIED,
    EffectivePermission,
    RolePermission,
    ToggleIntent,
    UserPermission,
)


OWNER_FIELD = "assigned_to"


def _as_role_permission(row) -> RolePermission:
    if isinstance(row, RolePermission):
        return row
    return RolePermission(**row)


def _as_user_permission(row) -> UserPermission:
    if isinstance(row, UserPermission):
        return row
    return UserPermission(**row)


def _require_identity(user_id: str, role: str):
    if not user_id:
        raise ValueError("user_id must be non-empty")
    if not role:
        raise ValueError("role must be non-empty")


# ============================================================
# PERMISSION INDEX
# ============================================================
class PermissionIndex:
    """
    Role defaults and user overrides keyed for O(1) lookups.

    Build one per data load and resolve as many cells as needed
    against it. Rows may be model instances or plain dicts as
    returned by Supabase. Duplicate keys are a data-integrity problem
    upstream; the last row seen wins here.
    """

    def __init__(
        self,
        role_defaults: Iterable = (),
        user_overrides: Iterable = (),
        known_codes: Optional[Iterable[str]] = None,
    ):
        self._defaults = {}
        for row in role_defaults:
            rp = _as_role_permission(row)
            self._defaults[(rp.role, rp.permission_code)] = rp

        self._overrides = {}
        for row in user_overrides:
            up = _as_user_permission(row)
            self._overrides[(up.user_id, up.permission_code)] = up

        self._known_codes = frozenset(known_codes) if known_codes is not None else None

    @property
    def user_overrides(self) -> List[UserPermission]:
        return list(self._overrides.values())

    @property
    def role_defaults(self) -> List[RolePermission]:
        return list(self._defaults.values())

    def is_known(self, code: str) -> bool:
        if self._known_codes is None:
            return True
        return code in self._known_codes

    def override_for(self, user_id: str, code: str) -> Optional[UserPermission]:
        return self._overrides.get((user_id, code))

    def default_for(self, role: str, code: str) -> Optional[RolePermission]:
        return self._defaults.get((role, code))

    def resolve(self, user_id: str, role: str, code: str) -> EffectivePermission:
        _require_identity(user_id, role)

        if not self.is_known(code):
            return DENIED

        override = self.override_for(user_id, code)
        if override is not None:
            return EffectivePermission(allowed=override.allowed, source=PermissionSource.user)

        default = self.default_for(role, code)
        if default is not None:
            return EffectivePermission(allowed=default.allowed, source=PermissionSource.role)

        return DENIED


def resolve(
    user_id: str,
    role: str,
    code: str,
    role_defaults: Iterable,
    user_overrides: Iterable,
    known_codes: Optional[Iterable[str]] = None,
) -> EffectivePermission:
    """
    One-off resolution over raw collections.

    Builds a throwaway index; callers resolving many cells should
    build a PermissionIndex once instead.
    """
    return PermissionIndex(role_defaults, user_overrides, known_codes).resolve(user_id, role, code)


# ============================================================
# TOGGLE PLANNING
# ============================================================
def plan_toggle(
    user_id: str,
    code: str,
    current_allowed: Optional[bool],
    user_overrides: Iterable,
) -> Tuple[List[UserPermission], ToggleIntent]:
    """
    Work out the write a permission-cell click needs and the override
    set that results once that write succeeds.

    Existing override → flip its stored value.
    No override       → insert allowed=True. This does not look at
    `current_allowed` or the role default: a first click on a cell that
    already shows "yes" still writes True. Kept as-is; see DESIGN.md.

    The input collection is never modified.
    """
    if not user_id:
        raise ValueError("user_id must be non-empty")

    overrides = [_as_user_permission(row) for row in user_overrides]
    existing = next(
        (up for up in overrides if up.user_id == user_id and up.permission_code == code),
        None,
    )

    if existing is not None:
        intent = ToggleIntent(
            action=ToggleAction.update,
            user_id=user_id,
            permission_code=code,
            allowed=not existing.allowed,
        )
        next_overrides = [
            intent.as_override() if up is existing else up
            for up in overrides
        ]
    else:
        intent = ToggleIntent(
            action=ToggleAction.insert,
            user_id=user_id,
            permission_code=code,
            allowed=True,
        )
        next_overrides = overrides + [intent.as_override()]

    return next_overrides, intent


# ============================================================
# ACCESS CONTEXT
# ============================================================
class AccessContext:
    """
    Everything a permission check needs for the current caller,
    passed explicitly instead of read from global session state.
    """

    def __init__(self, user_id: str, role: str, index: PermissionIndex, approved: bool = True):
        _require_identity(user_id, role)
        self.user_id = user_id
        self.role = role
        self.approved = approved
        self.index = index

    def resolve(self, code: str) -> EffectivePermission:
        return self.index.resolve(self.user_id, self.role, code)

    def can(self, code: str) -> bool:
        return self.resolve(code).allowed

    def __repr__(self):
        return f"AccessContext(user_id={self.user_id!r}, role={self.role!r}, approved={self.approved!r})"


# ============================================================
# VISIBILITY GATE
# ============================================================
def default_owner(record: Any) -> Optional[str]:
    if isinstance(record, dict):
        return record.get(OWNER_FIELD)
    return getattr(record, OWNER_FIELD, None)


def visibility_scope(resource: str, context: AccessContext) -> VisibilityScope:
    """view_all is checked first; a user holding both sees everything."""
    if context.can(f"{resource}.view_all"):
        return VisibilityScope.all
    if context.can(f"{resource}.view_own"):
        return VisibilityScope.own
    return VisibilityScope.none


def apply_visibility(
    records: Iterable,
    resource: str,
    context: AccessContext,
    owner_of: Callable[[Any], Optional[str]] = default_owner,
) -> list:
    """
    Reduce a freshly loaded record set to what the caller may see.

    Records without an owner are nobody's own and drop out under the
    view_own scope.
    """
    scope = visibility_scope(resource, context)

    if scope == VisibilityScope.all:
        return list(records)

    if scope == VisibilityScope.own:
        # user_id is never empty, so unowned records cannot match
        return [record for record in records if owner_of(record) == context.user_id]

    return []


def can_see_record(record: Any, resource: str, context: AccessContext) -> bool:
    return bool(apply_visibility([record], resource, context))
