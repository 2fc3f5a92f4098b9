"""Month arithmetic and period-over-period alignment for monthly series.

These run on the consuming side of the API: the server has no "compare to
last year" primitive, so a caller fetches the current and the previous window
separately and lines the two up here by year-month label.
"""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from hospital_dashboard.filters import check_month

SALES_FIELDS = ("totalOutpatientSales", "totalInpatientSales", "totalSales")


def _split(year_month: str) -> Tuple[int, int]:
    check_month(year_month, "yearMonth")
    year, month = year_month.split("-")
    return int(year), int(month)


def shift_months(year_month: str, months: int) -> str:
    year, month = _split(year_month)
    index = year * 12 + (month - 1) + months
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def shift_year_month(year_month: str, years: int = -1) -> str:
    return shift_months(year_month, years * 12)


def months_between(start_month: str, end_month: str) -> List[str]:
    """Every YYYY-MM label from ``start_month`` to ``end_month`` inclusive."""
    months = []
    current = start_month
    while current <= end_month:
        months.append(current)
        current = shift_months(current, 1)
    return months


def last_twelve_months(today: Optional[date] = None) -> Tuple[str, str]:
    today = today or date.today()
    end_month = today.strftime("%Y-%m")
    return shift_months(end_month, -11), end_month


def previous_year_window(start_month: str, end_month: str) -> Tuple[str, str]:
    return shift_year_month(start_month, -1), shift_year_month(end_month, -1)


def _previous_key(field: str) -> str:
    return "previous" + field[:1].upper() + field[1:]


def align_year_over_year(
    current: Iterable[Dict[str, Any]],
    previous: Iterable[Dict[str, Any]],
    fields: Sequence[str] = SALES_FIELDS,
    key: str = "yearMonth",
) -> List[Dict[str, Any]]:
    """Pair each current row with the same month one year earlier.

    Every output row keeps the current values and gains ``previousYearMonth``
    plus a ``previous<Field>`` entry per field; months missing from the prior
    window report 0.
    """
    by_month = {row[key]: row for row in previous}
    aligned = []
    for row in current:
        prior_month = shift_year_month(row[key], -1)
        prior = by_month.get(prior_month, {})
        merged = dict(row)
        merged["previousYearMonth"] = prior_month
        for field in fields:
            merged[_previous_key(field)] = prior.get(field) or 0
        aligned.append(merged)
    return aligned


def year_over_year_change(current: float, previous: float) -> Optional[float]:
    """Percentage change, or None when there is nothing to compare against."""
    if not previous:
        return None
    return (current - previous) / previous * 100.0


def align_series_to_months(
    series: Iterable[Dict[str, Any]],
    months: Sequence[str],
    fields: Sequence[str] = ("outpatientSales", "inpatientSales", "totalSales"),
    key: str = "yearMonth",
) -> List[Dict[str, Any]]:
    """Project one doctor's sparse series onto a fixed list of months, zero-filling gaps."""
    by_month = {row[key]: row for row in series}
    aligned = []
    for month in months:
        row = by_month.get(month)
        if row is None:
            row = {key: month}
            row.update({field: 0 for field in fields})
        aligned.append(row)
    return aligned
