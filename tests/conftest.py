# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser, get_current_user
from models.permission import RolePermission, UserPermission


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


@pytest.fixture
def login_as(app):
    """Make every request authenticate as the given CurrentUser."""
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login


@pytest.fixture
def super_admin():
    return CurrentUser(
        id="admin-1",
        email="admin@example.com",
        role="super_admin",
        approved=True,
    )


@pytest.fixture
def manager_user():
    return CurrentUser(
        id="U1",
        email="pm@example.com",
        role="property_manager",
        approved=True,
    )


@pytest.fixture
def contractor_user():
    return CurrentUser(
        id="U2",
        email="sub@example.com",
        role="sub_contractor",
        approved=True,
    )


@pytest.fixture
def pending_user():
    return CurrentUser(
        id="U3",
        email="new@example.com",
        role="pending",
        approved=False,
    )


@pytest.fixture
def role_defaults():
    """A small role_permissions table."""
    return [
        RolePermission(role="property_manager", permission_code="showings.view_own", allowed=True),
        RolePermission(role="property_manager", permission_code="work_orders.view_all", allowed=True),
        RolePermission(role="property_manager", permission_code="work_orders.edit", allowed=False),
        RolePermission(role="sub_contractor", permission_code="work_orders.view_own", allowed=True),
        RolePermission(role="sub_contractor", permission_code="showings.create", allowed=False),
    ]


@pytest.fixture
def user_overrides():
    return [
        UserPermission(user_id="U2", permission_code="showings.create", allowed=True),
    ]


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client whose query builder chains back to itself."""
    mock_client = Mock()
    mock_query = Mock()
    for method in ("select", "eq", "order", "limit", "insert", "update", "upsert"):
        getattr(mock_query, method).return_value = mock_query
    mock_query.execute.return_value = Mock(data=[])
    mock_client.table.return_value = mock_query
    return mock_client
