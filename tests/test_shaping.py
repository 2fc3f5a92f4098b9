from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from hospital_dashboard.shaping import (
    department_from_row,
    iso_date,
    iso_timestamp,
    to_float,
    to_int,
    ward_from_row,
)


def test_to_int_parses_driver_representations():
    assert to_int("220") == 220
    assert to_int(Decimal("9007199254740993")) == 9007199254740993
    assert to_int(7) == 7
    assert to_int(None) == 0


def test_to_int_rejects_non_numeric_strings():
    with pytest.raises(ValueError):
        to_int("abc")


def test_to_float():
    assert to_float(Decimal("1200000.50")) == 1200000.5
    assert to_float("3.25") == 3.25
    assert to_float(None) == 0.0


def test_iso_timestamp_variants():
    naive = datetime(2024, 1, 2, 3, 4, 5)
    assert iso_timestamp(naive) == "2024-01-02T03:04:05+00:00"
    assert iso_timestamp("2024-01-02 03:04:05") == "2024-01-02T03:04:05+00:00"

    jst = timezone(timedelta(hours=9))
    assert iso_timestamp(datetime(2024, 1, 2, 9, 0, tzinfo=jst)) == "2024-01-02T00:00:00+00:00"
    assert iso_timestamp(None) == "1970-01-01T00:00:00+00:00"
    assert iso_timestamp("") == "1970-01-01T00:00:00+00:00"


def test_iso_date_variants():
    assert iso_date(date(2024, 1, 2)) == "2024-01-02"
    assert iso_date("2024-01-02") == "2024-01-02"
    assert iso_date(datetime(2024, 1, 2, 23, 59)) == "2024-01-02"


def test_sub_objects_from_prefixed_columns():
    row = {
        "dept_id": 1,
        "dept_code": "01",
        "dept_name": "内科",
        "dept_display_order": 2,
        "dept_created_at": "2024-01-01 00:00:00",
        "ward_id": 5,
        "ward_code": "W1",
        "ward_name": "東病棟",
        "ward_capacity": "40",
        "ward_display_order": 1,
        "ward_created_at": None,
    }
    assert department_from_row(row, "dept_") == {
        "id": 1,
        "code": "01",
        "name": "内科",
        "display_order": 2,
        "created_at": "2024-01-01T00:00:00+00:00",
    }
    ward = ward_from_row(row, "ward_")
    assert ward["capacity"] == 40
    assert ward["code"] == "W1"
    assert ward["created_at"] == "1970-01-01T00:00:00+00:00"
