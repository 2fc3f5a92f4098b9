"""Row-to-contract mapping shared by every accessor.

Drivers hand back aggregate columns as ``Decimal`` or numeric strings, dates as
``date`` objects or text depending on the backend, and timestamps with or
without a timezone. Everything here is pure: the same row always maps to the
same output.
"""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional


def _coerce_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M:%S.%f", "%Y-%m-%d"):
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            pass
    return None


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def iso_timestamp(value: Any) -> str:
    """Render a timestamp column as ISO-8601 in UTC; naive values are taken as UTC.

    Every timestamp in the API is non-null, so a NULL or unreadable column
    renders as the Unix epoch instead of failing the whole list.
    """
    dt = _coerce_datetime(value)
    if dt is None:
        dt = EPOCH
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def iso_date(value: Any) -> Optional[str]:
    dt = _coerce_datetime(value)
    if dt is None:
        return None
    return dt.strftime("%Y-%m-%d")


def to_int(value: Any) -> int:
    """Parse a SUM/COUNT column into an int. NULL (no matching rows) becomes 0."""
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(Decimal(str(value)))
    except InvalidOperation:
        raise ValueError(f"Not a numeric aggregate: {value!r}")


def to_float(value: Any) -> float:
    if value is None:
        return 0.0
    return float(value)


def department_from_row(row: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    return {
        "id": row[f"{prefix}id"],
        "code": row[f"{prefix}code"],
        "name": row[f"{prefix}name"],
        "display_order": to_int(row.get(f"{prefix}display_order")),
        "created_at": iso_timestamp(row.get(f"{prefix}created_at")),
    }


def ward_from_row(row: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    ward = department_from_row(row, prefix)
    ward["capacity"] = to_int(row.get(f"{prefix}capacity"))
    return ward
