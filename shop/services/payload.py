"""
Helpers for reading identity fields from a raw request body before it has
been validated.
"""
from typing import Any, Mapping, Optional


def read_int(data: Any, *keys: str) -> Optional[int]:
    """Return the first integer found under *keys* in *data*, else None.

    Integral floats such as ``1.0`` count as integers, matching pydantic's
    lax int parsing. Booleans and other values are treated as absent.
    """
    if not isinstance(data, Mapping):
        return None
    for key in keys:
        value = data.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    return None
