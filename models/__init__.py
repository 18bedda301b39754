# -------------------------
# Enums
# -------------------------
from .enums import (
    PermissionSource,
    VisibilityScope,
    ToggleAction,
    WorkOrderStatus,
    WorkOrderPriority,
    InspectionType,
    AppointmentStatus,
)

# -------------------------
# Permission Models
# -------------------------
from .permission import (
    PermissionDefinition,
    RolePermission,
    UserPermission,
    EffectivePermission,
    ToggleIntent,
    PermissionToggleRequest,
    PermissionToggleResult,
    PermissionCell,
    UserPermissionRow,
)

# -------------------------
# Profile Models
# -------------------------
from .profile import ProfileRead, RoleUpdate

# -------------------------
# Record Models
# -------------------------
from .work_order import WorkOrderCreate, WorkOrderUpdate, WorkOrderStatusUpdate
from .showing import ShowingCreate, ShowingUpdate
from .inspection import InspectionCreate, InspectionUpdate
from .court_date import CourtDateCreate, CourtDateUpdate
from .appointment import AppointmentCreate, AppointmentUpdate
