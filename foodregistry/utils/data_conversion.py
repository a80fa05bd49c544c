# foodregistry/utils/data_conversion.py
from datetime import datetime, timezone
from typing import Any, Optional
from .logger import logger

def safe_int(value: Any) -> Optional[int]:
    """Converts a value to int, returning None when it cannot be done."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            float_val = float(value)
            return int(float_val) if float_val.is_integer() else None
        return int(value)
    except (ValueError, TypeError) as e:
        logger.debug(f"Could not convert '{value}' (type: {type(value)}) to int: {e}")
        return None

def clean_text(value: Any) -> Optional[str]:
    """Strips a string value. Non-strings and blank strings become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None

def to_utc_isoformat(value: Optional[datetime]) -> Optional[str]:
    """ISO 8601 string with an explicit offset. Naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
