# core/record_helpers.py

"""
HTTP-facing wrappers shared by the gated record routers.

Store failures become HTTPExceptions here; visibility comes from
apply_visibility so every resource is filtered the same way.
"""

from typing import List, Optional

from fastapi import HTTPException

from core.errors import PersistenceError, handle_supabase_error
from core.logging_config import logger
from core.permission_helpers import AccessContext, apply_visibility, can_see_record
from core import record_store


def list_visible(
    resource: str,
    context: AccessContext,
    order_by: Optional[str] = None,
    desc: bool = False,
    columns: str = "*",
) -> List[dict]:
    try:
        rows = record_store.list_records(resource, order_by=order_by, desc=desc, columns=columns)
    except PersistenceError as e:
        raise handle_supabase_error(e, f"Failed to load {resource}")

    return apply_visibility(rows, resource, context)


def get_visible_or_404(resource: str, record_id: str, context: AccessContext) -> dict:
    """Hidden records answer 404, the same as missing ones."""
    try:
        record = record_store.get_record(resource, record_id)
    except PersistenceError as e:
        raise handle_supabase_error(e, f"Failed to load {resource}")

    if record is None or not can_see_record(record, resource, context):
        raise HTTPException(404, f"{resource} record not found")
    return record


def create_owned(resource: str, payload: dict, context: AccessContext) -> dict:
    try:
        record = record_store.insert_owned_record(resource, payload, context.user_id)
    except PersistenceError as e:
        raise handle_supabase_error(e, f"Failed to create {resource}")

    logger.info(f"{resource} {record.get('id')} created by {context.user_id}")
    return record


def update_or_404(resource: str, record_id: str, changes: dict, context: AccessContext) -> dict:
    if not changes:
        raise HTTPException(400, "No fields to update")

    # edit alone does not reach records outside the caller's view
    get_visible_or_404(resource, record_id, context)

    try:
        record = record_store.update_record(resource, record_id, changes)
    except PersistenceError as e:
        raise handle_supabase_error(e, f"Failed to update {resource}")

    if record is None:
        raise HTTPException(404, f"{resource} record not found")

    logger.info(f"{resource} {record_id} updated by {context.user_id}: {sorted(changes)}")
    return record
