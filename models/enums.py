from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# PERMISSION SOURCE
# -----------------------------------------------------
class PermissionSource(BaseStrEnum):
    """Where an effective permission came from."""

    user = "user"
    role = "role"
    none = "none"


# -----------------------------------------------------
# VISIBILITY SCOPE
# -----------------------------------------------------
class VisibilityScope(BaseStrEnum):
    """Which slice of a resource's records a user may list."""

    all = "all"
    own = "own"
    none = "none"


# -----------------------------------------------------
# TOGGLE ACTION
# -----------------------------------------------------
class ToggleAction(BaseStrEnum):
    """Persistence step required to apply a permission toggle."""

    insert = "insert"
    update = "update"


# -----------------------------------------------------
# WORK ORDER STATUS
# -----------------------------------------------------
class WorkOrderStatus(BaseStrEnum):
    open = "open"
    in_progress = "in_progress"
    completed = "completed"


# -----------------------------------------------------
# WORK ORDER PRIORITY
# -----------------------------------------------------
class WorkOrderPriority(BaseStrEnum):
    low = "low"
    normal = "normal"
    high = "high"


# -----------------------------------------------------
# INSPECTION TYPE
# -----------------------------------------------------
class InspectionType(BaseStrEnum):
    preinspect = "preinspect"
    first = "first"
    reinspect = "reinspect"


# -----------------------------------------------------
# APPOINTMENT STATUS
# -----------------------------------------------------
class AppointmentStatus(BaseStrEnum):
    scheduled = "scheduled"
    in_progress = "in_progress"
    stopped = "stopped"
    completed = "completed"
