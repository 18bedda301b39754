# core/profile_store.py

from typing import List, Optional

from core.errors import PersistenceError, extract_supabase_error
from core.supabase_client import get_supabase_client
from models.profile import ProfileRead


PROFILES_TABLE = "profiles"
PROFILE_COLUMNS = "id, email, full_name, role, approved, created_at"


def _client():
    client = get_supabase_client()
    if not client:
        raise PersistenceError("Supabase client", "not configured")
    return client


def get_profile(user_id: str) -> Optional[ProfileRead]:
    try:
        result = (
            _client()
            .table(PROFILES_TABLE)
            .select(PROFILE_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to load profile", extract_supabase_error(e))

    rows = result.data or []
    return ProfileRead(**rows[0]) if rows else None


def list_profiles() -> List[ProfileRead]:
    try:
        result = (
            _client()
            .table(PROFILES_TABLE)
            .select(PROFILE_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to load profiles", extract_supabase_error(e))

    return [ProfileRead(**row) for row in (result.data or [])]


def update_profile(user_id: str, changes: dict) -> Optional[ProfileRead]:
    """Apply `changes` and return the updated row (None if no such profile)."""
    try:
        result = (
            _client()
            .table(PROFILES_TABLE)
            .update(changes)
            .eq("id", user_id)
            .execute()
        )
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError("Failed to update profile", extract_supabase_error(e))

    rows = result.data or []
    return ProfileRead(**rows[0]) if rows else None
