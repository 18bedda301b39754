# core/utils.py

from enum import Enum


def sanitize(data: dict) -> dict:
    """
    Sanitize dictionary data before it is written to Supabase:
    - Empty / whitespace-only strings → None
    - Strip string whitespace
    - Enum members → their value
    - Preserve booleans, numbers and None

    Type coercion is left to the Pydantic models; phone numbers and unit
    labels must stay strings.
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, Enum):
            v = v.value

        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped or None
            continue

        clean[k] = v

    return clean
