# ============================================
# PERMISSION CATALOG + ROLE DEFAULT SEEDS
# ============================================
import re


# =====================================================
# ROLES: one per profile, changed by a super_admin
# =====================================================
ROLES = [
    "super_admin",
    "property_manager",
    "sub_contractor",
    "pending",
]

SUPER_ADMIN_ROLE = "super_admin"
DEFAULT_ROLE = "pending"


# =====================================================
# RESOURCES GATED BY view_all / view_own
# =====================================================
GATED_RESOURCES = [
    "work_orders",
    "showings",
    "inspections",
    "court_dates",
    "appointments",
]

# Human labels used in catalog descriptions
RESOURCE_LABELS = {
    "work_orders": "work orders",
    "showings": "showings",
    "inspections": "inspections",
    "court_dates": "court dates",
    "appointments": "appointments",
}

ACTION_DESCRIPTIONS = {
    "view_all": "View all {label}",
    "view_own": "View {label} assigned to me",
    "create": "Create {label}",
    "edit": "Edit {label}",
}

PERMISSION_CODE_PATTERN = re.compile(r"^[a-z_]+\.[a-z_]+$")


def permission_code(resource: str, action: str) -> str:
    return f"{resource}.{action}"


def is_valid_permission_code(code: str) -> bool:
    """Codes are ASCII `word.word` strings, e.g. `court_dates.view_own`."""
    return bool(code) and bool(PERMISSION_CODE_PATTERN.match(code))


# =====================================================
# CATALOG: code → description (read-only data)
# =====================================================
PERMISSION_CATALOG = {
    permission_code(resource, action): template.format(label=RESOURCE_LABELS[resource])
    for resource in GATED_RESOURCES
    for action, template in ACTION_DESCRIPTIONS.items()
}

PERMISSION_CODES = frozenset(PERMISSION_CATALOG)


# =====================================================
# ROLE DEFAULTS: seeded into role_permissions
# =====================================================
def _grant(resources, actions):
    return {
        permission_code(resource, action)
        for resource in resources
        for action in actions
    }


DEFAULT_ROLE_PERMISSIONS = {

    # =====================================================
    # SUPER ADMIN: everything
    # =====================================================
    "super_admin": set(PERMISSION_CODES),

    # =====================================================
    # PROPERTY MANAGER: sees the whole portfolio
    # =====================================================
    "property_manager": _grant(
        GATED_RESOURCES, ["view_all", "create", "edit"]
    ),

    # =====================================================
    # SUB CONTRACTOR: only their own work
    # =====================================================
    "sub_contractor": _grant(
        ["work_orders", "appointments", "inspections"], ["view_own", "edit"]
    ),

    # =====================================================
    # PENDING: awaiting approval, nothing granted
    # =====================================================
    "pending": set(),
}


def default_role_rows() -> list:
    """
    Expand DEFAULT_ROLE_PERMISSIONS into explicit role_permissions rows.

    Every (role, code) pair gets a row so the matrix shows a `role`
    source rather than `none` for codes a role is denied.
    """
    rows = []
    for role in ROLES:
        granted = DEFAULT_ROLE_PERMISSIONS.get(role, set())
        for code in sorted(PERMISSION_CODES):
            rows.append({
                "role": role,
                "permission_code": code,
                "allowed": code in granted,
            })
    return rows
