# tests/test_admin_users.py

"""
Tests for the admin users screen: approvals, roles, permission matrix, overrides.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient

from core.errors import PersistenceError
from models.permission import PermissionDefinition, RolePermission, UserPermission
from models.profile import ProfileRead


PROFILES = [
    ProfileRead(id="U1", email="pm@example.com", role="property_manager", approved=True),
    ProfileRead(id="U2", email="sub@example.com", role="sub_contractor", approved=False),
]

CATALOG = [
    PermissionDefinition(code="showings.view_own", description="View showings assigned to me"),
    PermissionDefinition(code="work_orders.edit", description="Edit work orders"),
]


def test_non_super_admin_is_forbidden(client: TestClient, login_as, manager_user):
    login_as(manager_user)

    response = client.get("/admin/users")

    assert response.status_code == 403


def test_unapproved_super_admin_is_forbidden(client: TestClient, login_as, super_admin):
    login_as(super_admin.model_copy(update={"approved": False}))

    response = client.get("/admin/users")

    assert response.status_code == 403


def test_list_users(client: TestClient, login_as, super_admin):
    login_as(super_admin)

    with patch("routers.admin_users.list_profiles", return_value=PROFILES):
        response = client.get("/admin/users")

    assert response.status_code == 200
    assert [u["id"] for u in response.json()] == ["U1", "U2"]


def test_permission_matrix_reports_sources(client: TestClient, login_as, super_admin):
    login_as(super_admin)
    defaults = [RolePermission(role="property_manager", permission_code="showings.view_own", allowed=True)]
    overrides = [UserPermission(user_id="U2", permission_code="work_orders.edit", allowed=True)]

    with patch("routers.admin_users.list_permissions", return_value=CATALOG), \
         patch("routers.admin_users.list_profiles", return_value=PROFILES), \
         patch("routers.admin_users.list_role_defaults", return_value=defaults), \
         patch("routers.admin_users.list_user_overrides", return_value=overrides):
        response = client.get("/admin/users/permissions")

    assert response.status_code == 200
    rows = {row["user_id"]: row for row in response.json()}

    u1 = {c["permission_code"]: c for c in rows["U1"]["permissions"]}
    assert u1["showings.view_own"] == {
        "permission_code": "showings.view_own",
        "description": "View showings assigned to me",
        "allowed": True,
        "source": "role",
    }
    assert u1["work_orders.edit"]["allowed"] is False
    assert u1["work_orders.edit"]["source"] == "none"

    u2 = {c["permission_code"]: c for c in rows["U2"]["permissions"]}
    assert u2["work_orders.edit"]["allowed"] is True
    assert u2["work_orders.edit"]["source"] == "user"


def test_toggle_without_override_creates_true(client: TestClient, login_as, super_admin):
    login_as(super_admin)
    saved = UserPermission(user_id="U2", permission_code="work_orders.edit", allowed=True)

    with patch("routers.admin_users.get_profile", return_value=PROFILES[1]), \
         patch("routers.admin_users.list_user_overrides", return_value=[]), \
         patch("routers.admin_users.apply_toggle", return_value=saved) as mock_apply:
        response = client.post(
            "/admin/users/U2/permissions/toggle",
            json={"permission_code": "work_orders.edit", "current_allowed": False},
        )

    assert response.status_code == 200
    intent = mock_apply.call_args.args[0]
    assert intent.action == "insert"
    assert intent.allowed is True

    body = response.json()
    assert body["action"] == "insert"
    assert body["override"] == {"user_id": "U2", "permission_code": "work_orders.edit", "allowed": True}
    assert body["effective"] == {"allowed": True, "source": "user"}


def test_toggle_with_override_flips_it(client: TestClient, login_as, super_admin):
    login_as(super_admin)
    existing = [UserPermission(user_id="U2", permission_code="work_orders.edit", allowed=True)]
    saved = UserPermission(user_id="U2", permission_code="work_orders.edit", allowed=False)

    with patch("routers.admin_users.get_profile", return_value=PROFILES[1]), \
         patch("routers.admin_users.list_user_overrides", return_value=existing), \
         patch("routers.admin_users.apply_toggle", return_value=saved) as mock_apply:
        response = client.post(
            "/admin/users/U2/permissions/toggle",
            json={"permission_code": "work_orders.edit", "current_allowed": True},
        )

    assert response.status_code == 200
    intent = mock_apply.call_args.args[0]
    assert intent.action == "update"
    assert intent.allowed is False
    assert response.json()["effective"] == {"allowed": False, "source": "user"}


def test_toggle_failure_surfaces_message(client: TestClient, login_as, super_admin):
    login_as(super_admin)
    failure = PersistenceError("Failed to save permission override", "new row violates row-level security policy")

    with patch("routers.admin_users.get_profile", return_value=PROFILES[1]), \
         patch("routers.admin_users.list_user_overrides", return_value=[]), \
         patch("routers.admin_users.apply_toggle", side_effect=failure):
        response = client.post(
            "/admin/users/U2/permissions/toggle",
            json={"permission_code": "work_orders.edit"},
        )

    assert response.status_code == 500
    assert "row-level security" in response.json()["detail"]


def test_toggle_unknown_code_is_rejected(client: TestClient, login_as, super_admin):
    login_as(super_admin)

    with patch("routers.admin_users.apply_toggle") as mock_apply:
        response = client.post(
            "/admin/users/U2/permissions/toggle",
            json={"permission_code": "reports.export"},
        )

    assert response.status_code == 400
    mock_apply.assert_not_called()


def test_toggle_unknown_user_is_404(client: TestClient, login_as, super_admin):
    login_as(super_admin)

    with patch("routers.admin_users.get_profile", return_value=None):
        response = client.post(
            "/admin/users/nobody/permissions/toggle",
            json={"permission_code": "work_orders.edit"},
        )

    assert response.status_code == 404


def test_set_override(client: TestClient, login_as, super_admin):
    login_as(super_admin)
    saved = UserPermission(user_id="U1", permission_code="showings.view_all", allowed=False)

    with patch("routers.admin_users.get_profile", return_value=PROFILES[0]), \
         patch("routers.admin_users.upsert_user_override", return_value=saved) as mock_upsert:
        response = client.put(
            "/admin/users/U1/permissions/showings.view_all",
            json={"allowed": False},
        )

    assert response.status_code == 200
    mock_upsert.assert_called_once_with("U1", "showings.view_all", False)


def test_approve_user(client: TestClient, login_as, super_admin):
    login_as(super_admin)
    approved = PROFILES[1].model_copy(update={"approved": True})

    with patch("routers.admin_users.update_profile", return_value=approved) as mock_update:
        response = client.patch("/admin/users/U2/approve")

    assert response.status_code == 200
    assert response.json()["approved"] is True
    mock_update.assert_called_once_with("U2", {"approved": True})


def test_change_role_rejects_unknown_role(client: TestClient, login_as, super_admin):
    login_as(super_admin)

    with patch("routers.admin_users.update_profile") as mock_update:
        response = client.patch("/admin/users/U2/role", json={"role": "landlord"})

    assert response.status_code == 400
    mock_update.assert_not_called()


def test_change_role(client: TestClient, login_as, super_admin):
    login_as(super_admin)
    promoted = PROFILES[1].model_copy(update={"role": "property_manager"})

    with patch("routers.admin_users.update_profile", return_value=promoted):
        response = client.patch("/admin/users/U2/role", json={"role": "property_manager"})

    assert response.status_code == 200
    assert response.json()["role"] == "property_manager"
