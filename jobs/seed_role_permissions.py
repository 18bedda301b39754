# jobs/seed_role_permissions.py

from core.errors import PersistenceError
from core.logging_config import logger
from core.permission_store import upsert_permissions, upsert_role_defaults
from core.permissions import PERMISSION_CATALOG, default_role_rows
from core.supabase_client import get_supabase_client


def run():
    """
    CLI entry point: python -m jobs.seed_role_permissions

    Writes the permission catalog and the role-default matrix.
    User overrides are never touched.
    """
    client = get_supabase_client()
    if not client:
        raise RuntimeError("Supabase not configured")

    try:
        n_perms = upsert_permissions(PERMISSION_CATALOG)
        n_roles = upsert_role_defaults(default_role_rows())
    except PersistenceError as e:
        logger.error(f"Seeding failed: {e.message}")
        raise

    logger.info(f"Seeded {n_perms} permissions and {n_roles} role defaults")
    return {"permissions": n_perms, "role_permissions": n_roles}


if __name__ == "__main__":
    run()
