import re
from datetime import datetime
from typing import Any, Mapping

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def is_valid_date(date_str: Any) -> bool:
    if not isinstance(date_str, str) or not DATE_RE.match(date_str):
        return False
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError:
        return False
    return True

def is_valid_routine_name(name: Any) -> bool:
    return isinstance(name, str) and 1 <= len(name.strip()) <= 100

def has_snapshot_shape(data: Any) -> bool:
    """Снимок должен содержать списки days и routines"""
    return (
        isinstance(data, Mapping)
        and isinstance(data.get("days"), list)
        and isinstance(data.get("routines"), list)
    )
