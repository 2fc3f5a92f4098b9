from datetime import date

import pytest

from hospital_dashboard.client import DashboardClient, GraphQLError, quick_date_range
from hospital_dashboard.exceptions import AccessDenied


@pytest.fixture()
def dashboard(client):
    return DashboardClient(url="/graphql", session=client)


@pytest.fixture()
def secured_dashboard(secured_client):
    return DashboardClient(url="/graphql", session=secured_client)


def test_quick_date_range():
    assert quick_date_range(7, date(2024, 1, 8)) == ("2024-01-01", "2024-01-08")
    assert quick_date_range(30, date(2024, 3, 1)) == ("2024-01-31", "2024-03-01")


def test_authenticate_and_logout(dashboard):
    staff = dashboard.authenticate("manager001")
    assert staff["permission"]["level"] == 90
    assert dashboard.staff_id == "manager001"
    assert dashboard.has_permission(90)
    assert not dashboard.has_permission(99)

    dashboard.logout()
    assert dashboard.staff is None
    assert not dashboard.has_permission(0)


def test_unknown_staff_stays_unauthenticated(dashboard):
    assert dashboard.authenticate("ghost") is None
    assert dashboard.staff_id is None
    with pytest.raises(AccessDenied):
        dashboard.require_level(90)


def test_graphql_errors_are_raised(dashboard):
    with pytest.raises(GraphQLError) as excinfo:
        dashboard.outpatient_summary("2024/01/01")
    assert "startDate" in str(excinfo.value)
    assert excinfo.value.errors


def test_patient_views(dashboard):
    summary = dashboard.outpatient_summary("2024-01-01", "2024-01-02")
    assert [row["totalPatients"] for row in summary] == [220, 200]
    assert len(dashboard.outpatient_by_department()) == 4
    assert [row["ward"]["code"] for row in dashboard.inpatient_by_ward()] == ["W1", "W2", "W3"]
    assert dashboard.inpatient_summary("2024-01-02")[0]["totalCurrent"] == 37
    assert [d["code"] for d in dashboard.departments()] == ["99", "01", "02", "03"]
    assert len(dashboard.wards()) == 3


def test_sales_comparison_hospital_wide(dashboard):
    dashboard.authenticate("admin001")
    rows = dashboard.sales_comparison(today=date(2024, 2, 15))
    assert [row["yearMonth"] for row in rows] == ["2024-01", "2024-02"]
    january, february = rows
    assert january["totalSales"] == 5300000.75
    assert january["previousYearMonth"] == "2023-01"
    assert january["previousTotalSales"] == 3000000
    assert february["previousTotalSales"] == 0


def test_sales_comparison_for_one_doctor(dashboard):
    dashboard.authenticate("manager001")
    rows = dashboard.sales_comparison(doctor_code="D001", today=date(2024, 2, 15))
    assert rows[0]["totalSales"] == 3300000
    assert rows[0]["totalOutpatientSales"] == 1200000
    assert rows[0]["previousTotalSales"] == 3000000


def test_sales_comparison_for_one_department(dashboard):
    dashboard.authenticate("admin001")
    rows = dashboard.sales_comparison(department_code="02", today=date(2024, 2, 15))
    assert rows == [
        {
            "yearMonth": "2024-01",
            "totalOutpatientSales": 800000,
            "totalInpatientSales": 0,
            "totalSales": 800000,
            "previousYearMonth": "2023-01",
            "previousTotalOutpatientSales": 0,
            "previousTotalInpatientSales": 0,
            "previousTotalSales": 0,
        }
    ]


def test_sales_comparison_requires_level(dashboard):
    dashboard.authenticate("doctor001")
    with pytest.raises(AccessDenied):
        dashboard.sales_comparison(today=date(2024, 2, 15))


def test_sales_breakdown_is_zero_filled(dashboard):
    rows = dashboard.sales_breakdown("01", "2024-01", "2024-03")
    assert [row["doctor"]["code"] for row in rows] == ["D001", "D002", "D004"]
    for row in rows:
        assert [s["yearMonth"] for s in row["sales"]] == ["2024-01", "2024-02", "2024-03"]
    assert rows[1]["sales"][1]["totalSales"] == 0
    assert all(s["totalSales"] == 0 for s in rows[2]["sales"])


def test_staff_header_is_sent(secured_dashboard):
    secured_dashboard.authenticate("manager001")
    assert secured_dashboard.sales_summary("2024-02", "2024-02")[0]["totalSales"] == 3000000


def test_restricted_fields_rejected_server_side(secured_dashboard):
    secured_dashboard.authenticate("doctor001")
    with pytest.raises(GraphQLError):
        secured_dashboard.sales_by_department("01")
