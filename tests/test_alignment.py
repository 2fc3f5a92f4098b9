from datetime import date

import pytest

from hospital_dashboard import alignment
from hospital_dashboard.exceptions import ValidationError


def test_month_arithmetic_crosses_year_boundaries():
    assert alignment.shift_months("2024-01", -1) == "2023-12"
    assert alignment.shift_months("2023-12", 1) == "2024-01"
    assert alignment.shift_year_month("2024-02") == "2023-02"
    assert alignment.shift_year_month("2023-02", years=1) == "2024-02"


def test_shift_rejects_bad_labels():
    with pytest.raises(ValidationError):
        alignment.shift_months("2024-13", 1)


def test_months_between():
    assert alignment.months_between("2023-11", "2024-02") == ["2023-11", "2023-12", "2024-01", "2024-02"]
    assert alignment.months_between("2024-03", "2024-01") == []


def test_last_twelve_months_and_previous_window():
    start, end = alignment.last_twelve_months(date(2024, 2, 15))
    assert (start, end) == ("2023-03", "2024-02")
    assert len(alignment.months_between(start, end)) == 12
    assert alignment.previous_year_window(start, end) == ("2022-03", "2023-02")


def test_align_year_over_year_pairs_by_label():
    current = [
        {"yearMonth": "2024-01", "totalOutpatientSales": 10, "totalInpatientSales": 20, "totalSales": 30},
        {"yearMonth": "2024-02", "totalOutpatientSales": 5, "totalInpatientSales": 5, "totalSales": 10},
    ]
    previous = [
        {"yearMonth": "2023-01", "totalOutpatientSales": 8, "totalInpatientSales": 12, "totalSales": 20},
    ]
    aligned = alignment.align_year_over_year(current, previous)

    assert aligned[0]["previousYearMonth"] == "2023-01"
    assert aligned[0]["previousTotalSales"] == 20
    assert aligned[0]["previousTotalInpatientSales"] == 12
    assert aligned[0]["totalSales"] == 30
    assert aligned[1]["previousYearMonth"] == "2023-02"
    assert aligned[1]["previousTotalSales"] == 0
    assert "previousYearMonth" not in current[0]


def test_year_over_year_change():
    assert alignment.year_over_year_change(120, 100) == pytest.approx(20.0)
    assert alignment.year_over_year_change(50, 0) is None


def test_align_series_to_months_zero_fills_gaps():
    series = [{"yearMonth": "2024-02", "outpatientSales": 1.5, "inpatientSales": 2.0, "totalSales": 3.5}]
    aligned = alignment.align_series_to_months(series, ["2024-01", "2024-02", "2024-03"])
    assert [row["yearMonth"] for row in aligned] == ["2024-01", "2024-02", "2024-03"]
    assert aligned[0] == {"yearMonth": "2024-01", "outpatientSales": 0, "inpatientSales": 0, "totalSales": 0}
    assert aligned[1]["totalSales"] == 3.5
