# tests/test_records.py

"""
Tests for the permission-gated record routers and the at-a-glance view.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from core.errors import PersistenceError
from models.permission import RolePermission, UserPermission


ROWS = [
    {"id": "r1", "title": "Mine", "assigned_to": "U1"},
    {"id": "r2", "title": "Theirs", "assigned_to": "U2"},
    {"id": "r3", "title": "Nobody's", "assigned_to": None},
]


def grants(role, *codes):
    return [RolePermission(role=role, permission_code=code, allowed=True) for code in codes]


@pytest.fixture
def access(request):
    """Patch the permission tables read when building the access context."""
    def _access(defaults=(), overrides=()):
        p1 = patch("dependencies.auth.list_role_defaults", return_value=list(defaults))
        p2 = patch("dependencies.auth.list_user_overrides", return_value=list(overrides))
        p1.start()
        p2.start()
        request.addfinalizer(p1.stop)
        request.addfinalizer(p2.stop)
    return _access


def test_missing_token_is_401(client: TestClient):
    response = client.get("/showings")

    assert response.status_code == 401
    assert response.headers.get("www-authenticate") == "Bearer"


def test_pending_user_is_403(client: TestClient, login_as, pending_user):
    login_as(pending_user)

    response = client.get("/work-orders")

    assert response.status_code == 403
    assert response.json()["detail"] == "Account pending approval"


def test_view_own_filters_list(client: TestClient, login_as, manager_user, access):
    login_as(manager_user)
    access(grants("property_manager", "showings.view_own"))

    with patch("core.record_store.list_records", return_value=ROWS) as mock_list:
        response = client.get("/showings")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": [ROWS[0]]}
    mock_list.assert_called_once_with("showings", order_by="showing_time", desc=False, columns="*")


def test_view_all_returns_every_row(client: TestClient, login_as, manager_user, access):
    login_as(manager_user)
    access(grants("property_manager", "work_orders.view_all"))

    with patch("core.record_store.list_records", return_value=ROWS):
        response = client.get("/work-orders")

    assert [r["id"] for r in response.json()["data"]] == ["r1", "r2", "r3"]


def test_no_view_permission_returns_empty(client: TestClient, login_as, manager_user, access):
    login_as(manager_user)
    access()

    with patch("core.record_store.list_records", return_value=ROWS):
        response = client.get("/court-dates")

    assert response.status_code == 200
    assert response.json()["data"] == []


def test_override_revokes_role_view_all(client: TestClient, login_as, manager_user, access):
    login_as(manager_user)
    access(
        grants("property_manager", "inspections.view_all", "inspections.view_own"),
        [UserPermission(user_id="U1", permission_code="inspections.view_all", allowed=False)],
    )

    with patch("core.record_store.list_records", return_value=ROWS):
        response = client.get("/inspections")

    assert [r["id"] for r in response.json()["data"]] == ["r1"]


def test_hidden_record_is_404(client: TestClient, login_as, contractor_user, access):
    login_as(contractor_user)
    access(grants("sub_contractor", "appointments.view_own"))

    with patch("core.record_store.get_record", return_value=ROWS[0]):
        response = client.get("/appointments/r1")

    assert response.status_code == 404


def test_visible_record_is_returned(client: TestClient, login_as, contractor_user, access):
    login_as(contractor_user)
    access(grants("sub_contractor", "appointments.view_own"))

    with patch("core.record_store.get_record", return_value=ROWS[1]):
        response = client.get("/appointments/r2")

    assert response.status_code == 200
    assert response.json()["id"] == "r2"


def test_create_without_permission_is_403(client: TestClient, login_as, contractor_user, access):
    login_as(contractor_user)
    access(grants("sub_contractor", "showings.view_own"))

    with patch("core.record_store.insert_owned_record") as mock_insert:
        response = client.post("/showings", json={"title": "Open house"})

    assert response.status_code == 403
    assert "showings.create" in response.json()["detail"]
    mock_insert.assert_not_called()


def test_create_with_override_assigns_caller(client: TestClient, login_as, contractor_user, access, mock_supabase_client):
    login_as(contractor_user)
    access(
        [RolePermission(role="sub_contractor", permission_code="showings.create", allowed=False)],
        [UserPermission(user_id="U2", permission_code="showings.create", allowed=True)],
    )
    query = mock_supabase_client.table.return_value
    query.execute.return_value.data = [{"id": "s1", "title": "Open house", "assigned_to": "U2"}]

    with patch("core.record_store.get_supabase_client", return_value=mock_supabase_client):
        response = client.post("/showings", json={"title": "  Open house ", "contact_phone": "0800123"})

    assert response.status_code == 201
    inserted = query.insert.call_args.args[0]
    assert inserted["title"] == "Open house"
    assert inserted["contact_phone"] == "0800123"
    assert inserted["assigned_to"] == "U2"
    assert inserted["created_by"] == "U2"


def test_work_order_create_accepts_edit_permission(client: TestClient, login_as, contractor_user, access):
    login_as(contractor_user)
    access(grants("sub_contractor", "work_orders.edit"))
    created = {"id": "w1", "title": "Leaky tap", "status": "open", "assigned_to": "U2"}

    with patch("core.record_store.insert_owned_record", return_value=created) as mock_insert:
        response = client.post("/work-orders", json={"title": "Leaky tap"})

    assert response.status_code == 201
    resource, payload, owner = mock_insert.call_args.args
    assert resource == "work_orders"
    assert payload["status"] == "open"
    assert owner == "U2"


def test_update_requires_edit(client: TestClient, login_as, manager_user, access):
    login_as(manager_user)
    access(grants("property_manager", "court_dates.view_all", "court_dates.create"))

    response = client.patch("/court-dates/c1", json={"courtroom": "4B"})

    assert response.status_code == 403


def test_update_with_no_fields_is_400(client: TestClient, login_as, manager_user, access):
    login_as(manager_user)
    access(grants("property_manager", "court_dates.edit"))

    response = client.patch("/court-dates/c1", json={})

    assert response.status_code == 400


def test_update_missing_record_is_404(client: TestClient, login_as, manager_user, access):
    login_as(manager_user)
    access(grants("property_manager", "work_orders.edit", "work_orders.view_all"))

    with patch("core.record_store.get_record", return_value=None), \
         patch("core.record_store.update_record") as mock_update:
        response = client.patch("/work-orders/w9/status", json={"status": "completed"})

    assert response.status_code == 404
    mock_update.assert_not_called()


def test_edit_cannot_reach_hidden_record(client: TestClient, login_as, contractor_user, access):
    login_as(contractor_user)
    access(grants("sub_contractor", "work_orders.view_own", "work_orders.edit"))
    theirs = {"id": "r1", "title": "Boiler", "assigned_to": "U1", "notes": "tenant notes"}

    with patch("core.record_store.get_record", return_value=theirs), \
         patch("core.record_store.update_record") as mock_update:
        get_response = client.get("/work-orders/r1")
        patch_response = client.patch("/work-orders/r1", json={"title": "Renamed"})
        status_response = client.patch("/work-orders/r1/status", json={"status": "completed"})

    assert get_response.status_code == 404
    assert patch_response.status_code == 404
    assert status_response.status_code == 404
    assert "tenant notes" not in patch_response.text
    mock_update.assert_not_called()


def test_edit_own_record(client: TestClient, login_as, contractor_user, access):
    login_as(contractor_user)
    access(grants("sub_contractor", "work_orders.view_own", "work_orders.edit"))
    mine = {"id": "r2", "title": "Leaky tap", "assigned_to": "U2"}
    updated = dict(mine, title="Leaky kitchen tap")

    with patch("core.record_store.get_record", return_value=mine), \
         patch("core.record_store.update_record", return_value=updated) as mock_update:
        response = client.patch("/work-orders/r2", json={"title": "Leaky kitchen tap"})

    assert response.status_code == 200
    assert response.json()["title"] == "Leaky kitchen tap"
    mock_update.assert_called_once_with("work_orders", "r2", {"title": "Leaky kitchen tap"})


def test_store_failure_is_reported(client: TestClient, login_as, manager_user, access):
    login_as(manager_user)
    access(grants("property_manager", "showings.view_all"))
    failure = PersistenceError("Failed to load showings", "connection refused")

    with patch("core.record_store.list_records", side_effect=failure):
        response = client.get("/showings")

    assert response.status_code == 500
    assert "connection refused" in response.json()["detail"]


def test_at_a_glance_gates_each_section(client: TestClient, login_as, contractor_user, access):
    login_as(contractor_user)
    access(grants("sub_contractor", "work_orders.view_own", "showings.view_all"))

    with patch("core.record_store.list_records", return_value=ROWS):
        response = client.get("/at-a-glance")

    assert response.status_code == 200
    sections = response.json()["sections"]

    assert sections["work_orders"]["scope"] == "own"
    assert [r["id"] for r in sections["work_orders"]["data"]] == ["r2"]
    assert sections["showings"]["scope"] == "all"
    assert sections["showings"]["count"] == 3
    assert sections["court_dates"] == {"scope": "none", "count": 0, "data": []}


def test_my_permissions(client: TestClient, login_as, contractor_user, access):
    login_as(contractor_user)
    access(
        grants("sub_contractor", "work_orders.view_own"),
        [UserPermission(user_id="U2", permission_code="showings.create", allowed=True)],
    )

    response = client.get("/permissions/me")

    assert response.status_code == 200
    body = response.json()
    cells = {c["permission_code"]: c for c in body["permissions"]}
    assert cells["work_orders.view_own"]["source"] == "role"
    assert cells["showings.create"]["source"] == "user"
    assert cells["inspections.view_all"]["allowed"] is False
    assert body["visibility"]["work_orders"] == "own"
    assert body["visibility"]["showings"] == "none"
