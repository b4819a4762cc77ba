#!/usr/bin/env python3
"""
Conversion helpers for API responses.
"""

from decimal import Decimal
from typing import Optional, Any
from datetime import datetime


def safe_float(value: Optional[Any], default: float = 0.0) -> float:
    """
    Convert a score (Decimal, int, float or None) to float.

    Returns:
        Float value, or default when value is None or not numeric.
    """
    if value is None:
        return default

    if isinstance(value, Decimal):
        return float(value)

    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.isoformat()
