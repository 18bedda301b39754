# core/errors.py

from fastapi import HTTPException

from core.logging_config import logger


class PersistenceError(Exception):
    """
    A Supabase table read/write failed.

    Carries the operation that was attempted and the readable detail
    extracted from the client error. Callers keep whatever state they
    had before the call and surface ``message`` to the user.
    """

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return f"{self.operation}: {self.detail}"


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    if isinstance(error, PersistenceError):
        return error.detail

    # Case 1: Supabase Auth / GoTrue / PostgREST errors
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2: Supabase errors with args (common)
    if error.args:
        return str(error.args[0])

    # Case 3: Plain string fallback
    return str(error) or "Unknown Supabase error"


def handle_supabase_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle Supabase errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred
        operation: Description of what operation failed (e.g., "Failed to toggle permission")
        status_code: HTTP status code (default 500)
    """
    error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "foreign key" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Invalid reference")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed: {error_detail}")
