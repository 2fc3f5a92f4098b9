"""Helpers for assembling optional range predicates.

Every builder in this package adds its WHERE / ON conditions through these
functions so that client supplied values only ever reach the database as bind
parameters. Column names passed in here are fixed strings chosen by the
builders, never values from a request.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from hospital_dashboard.exceptions import ValidationError

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"


def _check_format(value: Optional[str], fmt: str, label: str, name: str) -> Optional[str]:
    if not value:
        return None
    try:
        parsed = datetime.strptime(value, fmt)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a {label} string, got {value!r}")
    # strptime accepts unpadded fields such as 2024-1-5; bounds compare as text
    if parsed.strftime(fmt) != value:
        raise ValidationError(f"{name} must be a {label} string, got {value!r}")
    return value


def check_date(value: Optional[str], name: str = "date") -> Optional[str]:
    return _check_format(value, DATE_FORMAT, "YYYY-MM-DD", name)


def check_month(value: Optional[str], name: str = "month") -> Optional[str]:
    return _check_format(value, MONTH_FORMAT, "YYYY-MM", name)


def require_code(value: Optional[str], name: str) -> str:
    """Reject a missing or blank mandatory identifier; otherwise pass it through untouched."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return value


def range_conditions(
    column: str,
    start: Optional[str],
    end: Optional[str],
    params: Dict[str, Any],
    prefix: str = "",
) -> List[str]:
    """Return inclusive ``>=`` / ``<=`` predicates for whichever bounds are present.

    Bound values are written into ``params`` under ``{prefix}start`` and
    ``{prefix}end``.
    """
    conditions = []
    if start:
        key = f"{prefix}start"
        conditions.append(f"{column} >= :{key}")
        params[key] = start
    if end:
        key = f"{prefix}end"
        conditions.append(f"{column} <= :{key}")
        params[key] = end
    return conditions


def where_clause(conditions: List[str]) -> str:
    if not conditions:
        return ""
    return " WHERE " + " AND ".join(conditions)
