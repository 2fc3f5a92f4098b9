"""Doctor listings and monthly sales aggregations.

``year_month`` is a reserved word in MySQL, hence the backticks.
"""

from collections import OrderedDict
from typing import Any, Dict, List, Optional

from hospital_dashboard.db_core import Database
from hospital_dashboard.filters import check_month, range_conditions, require_code, where_clause
from hospital_dashboard.shaping import department_from_row, iso_timestamp, to_float, to_int

_DOCTOR_COLUMNS = """
    d.code, d.name, d.department_code, d.display_order, d.created_at,
    dept.id AS dept_id, dept.code AS dept_code, dept.name AS dept_name,
    dept.display_order AS dept_display_order, dept.created_at AS dept_created_at
"""


def _doctor_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "code": row["code"],
        "name": row["name"],
        "department_code": row["department_code"],
        "display_order": to_int(row["display_order"]),
        "department": department_from_row(row, "dept_"),
        "created_at": iso_timestamp(row["created_at"]),
    }


def _sales_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    outpatient = to_float(row["outpatient_sales"])
    inpatient = to_float(row["inpatient_sales"])
    return {
        "doctor_code": row["doctor_code"],
        "year_month": row["year_month"],
        "outpatient_sales": outpatient,
        "inpatient_sales": inpatient,
        "total_sales": outpatient + inpatient,
        "updated_at": iso_timestamp(row["updated_at"]),
    }


def _summary_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    outpatient = to_float(row["total_outpatient"])
    inpatient = to_float(row["total_inpatient"])
    return {
        "year_month": row["year_month"],
        "total_outpatient_sales": outpatient,
        "total_inpatient_sales": inpatient,
        "total_sales": outpatient + inpatient,
    }


def _check_months(start_month: Optional[str], end_month: Optional[str]) -> None:
    check_month(start_month, "startMonth")
    check_month(end_month, "endMonth")


def list_doctors(db: Database) -> List[Dict[str, Any]]:
    rows = db.execute(
        f"""
        SELECT {_DOCTOR_COLUMNS}
        FROM doctors d
        JOIN departments dept ON d.department_code = dept.code
        ORDER BY dept.display_order, dept.code, d.display_order, d.name
        """,
        query_name="doctors",
    )
    return [_doctor_from_row(row) for row in rows]


def doctors_by_department(db: Database, department_code: str) -> List[Dict[str, Any]]:
    require_code(department_code, "departmentCode")
    rows = db.execute(
        f"""
        SELECT {_DOCTOR_COLUMNS}
        FROM doctors d
        JOIN departments dept ON d.department_code = dept.code
        WHERE d.department_code = :department_code
        ORDER BY d.display_order, d.name
        """,
        {"department_code": department_code},
        query_name="doctors_by_department",
    )
    return [_doctor_from_row(row) for row in rows]


def sales_summary(
    db: Database,
    start_month: Optional[str] = None,
    end_month: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Hospital-wide monthly totals in chronological order."""
    _check_months(start_month, end_month)

    params: Dict[str, Any] = {}
    conditions = range_conditions("`year_month`", start_month, end_month, params)
    sql = f"""
        SELECT `year_month`,
               SUM(outpatient_sales) AS total_outpatient,
               SUM(inpatient_sales) AS total_inpatient
        FROM sales
        {where_clause(conditions)}
        GROUP BY `year_month`
        ORDER BY `year_month`
    """
    rows = db.execute(sql, params, query_name="sales_summary")
    return [_summary_from_row(row) for row in rows]


def sales_by_doctor(
    db: Database,
    doctor_code: str,
    start_month: Optional[str] = None,
    end_month: Optional[str] = None,
) -> List[Dict[str, Any]]:
    require_code(doctor_code, "doctorCode")
    _check_months(start_month, end_month)

    params: Dict[str, Any] = {"doctor_code": doctor_code}
    conditions = ["doctor_code = :doctor_code"]
    conditions += range_conditions("`year_month`", start_month, end_month, params)
    sql = f"""
        SELECT doctor_code, `year_month`, outpatient_sales, inpatient_sales, updated_at
        FROM sales
        {where_clause(conditions)}
        ORDER BY `year_month`
    """
    rows = db.execute(sql, params, query_name="sales_by_doctor")
    return [_sales_from_row(row) for row in rows]


def sales_by_department(
    db: Database,
    department_code: str,
    start_month: Optional[str] = None,
    end_month: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Monthly totals summed over the doctors belonging to one department."""
    require_code(department_code, "departmentCode")
    _check_months(start_month, end_month)

    params: Dict[str, Any] = {"department_code": department_code}
    conditions = ["d.department_code = :department_code"]
    conditions += range_conditions("s.`year_month`", start_month, end_month, params)
    sql = f"""
        SELECT s.`year_month`,
               SUM(s.outpatient_sales) AS total_outpatient,
               SUM(s.inpatient_sales) AS total_inpatient
        FROM sales s
        JOIN doctors d ON s.doctor_code = d.code
        {where_clause(conditions)}
        GROUP BY s.`year_month`
        ORDER BY s.`year_month`
    """
    rows = db.execute(sql, params, query_name="sales_by_department")
    return [_summary_from_row(row) for row in rows]


def sales_by_doctors_in_department(
    db: Database,
    department_code: str,
    start_month: Optional[str] = None,
    end_month: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """One monthly series per doctor of the department, for stacked breakdowns.

    Series are not aligned: a doctor with no sales in a month simply has no
    entry for it, and a doctor with no sales at all gets an empty list.
    """
    require_code(department_code, "departmentCode")
    _check_months(start_month, end_month)

    doctors = doctors_by_department(db, department_code)

    params: Dict[str, Any] = {"department_code": department_code}
    conditions = ["d.department_code = :department_code"]
    conditions += range_conditions("s.`year_month`", start_month, end_month, params)
    sql = f"""
        SELECT s.doctor_code, s.`year_month`, s.outpatient_sales, s.inpatient_sales, s.updated_at
        FROM sales s
        JOIN doctors d ON s.doctor_code = d.code
        {where_clause(conditions)}
        ORDER BY s.doctor_code, s.`year_month`
    """
    rows = db.execute(sql, params, query_name="sales_by_doctors_in_department")

    series: "OrderedDict[str, List[Dict[str, Any]]]" = OrderedDict(
        (doctor["code"], []) for doctor in doctors
    )
    for row in rows:
        series.setdefault(row["doctor_code"], []).append(_sales_from_row(row))

    return [{"doctor": doctor, "sales": series[doctor["code"]]} for doctor in doctors]
