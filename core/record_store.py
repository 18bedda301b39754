# core/record_store.py

"""
Row access for the permission-gated record tables.

Every listing returns the full table slice; visibility filtering is
applied afterwards by core.permission_helpers.apply_visibility.
"""

from datetime import datetime, timezone
from typing import List, Optional

from core.errors import PersistenceError, extract_supabase_error
from core.permissions import GATED_RESOURCES
from core.supabase_client import get_supabase_client
from core.utils import sanitize


def _check_resource(resource: str):
    if resource not in GATED_RESOURCES:
        raise ValueError(f"Unknown record resource: {resource}")


def _client():
    client = get_supabase_client()
    if not client:
        raise PersistenceError("Supabase client", "not configured")
    return client


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def list_records(
    resource: str,
    order_by: Optional[str] = None,
    desc: bool = False,
    columns: str = "*",
) -> List[dict]:
    _check_resource(resource)

    try:
        query = _client().table(resource).select(columns)
        if order_by:
            query = query.order(order_by, desc=desc)
        result = query.execute()
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError(f"Failed to load {resource}", extract_supabase_error(e))

    return result.data or []


def get_record(resource: str, record_id: str) -> Optional[dict]:
    _check_resource(resource)

    try:
        result = (
            _client()
            .table(resource)
            .select("*")
            .eq("id", record_id)
            .limit(1)
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError(f"Failed to load {resource}", extract_supabase_error(e))

    rows = result.data or []
    return rows[0] if rows else None


def insert_owned_record(resource: str, payload: dict, owner_id: str) -> dict:
    """New rows are assigned to, and created by, the caller."""
    _check_resource(resource)

    data = sanitize(payload)
    data["assigned_to"] = owner_id
    data["created_by"] = owner_id

    try:
        result = (
            _client()
            .table(resource)
            .insert(data, returning="representation")
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError(f"Failed to create {resource}", extract_supabase_error(e))

    if not result.data:
        raise PersistenceError(f"Failed to create {resource}", "insert returned no data")
    return result.data[0]


def update_record(resource: str, record_id: str, changes: dict) -> Optional[dict]:
    _check_resource(resource)

    data = sanitize(changes)
    data["updated_at"] = _now()

    try:
        result = (
            _client()
            .table(resource)
            .update(data, returning="representation")
            .eq("id", record_id)
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError(f"Failed to update {resource}", extract_supabase_error(e))

    rows = result.data or []
    return rows[0] if rows else None
