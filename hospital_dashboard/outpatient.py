from typing import Any, Dict, List, Optional

from hospital_dashboard.db_core import Database
from hospital_dashboard.filters import check_date, range_conditions, where_clause
from hospital_dashboard.shaping import department_from_row, iso_date, iso_timestamp, to_int


def outpatient_records(
    db: Database,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    department_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Per-day, per-department rows with the department attached."""
    check_date(start_date, "startDate")
    check_date(end_date, "endDate")

    params: Dict[str, Any] = {}
    conditions = range_conditions("o.date", start_date, end_date, params)
    if department_id is not None:
        conditions.append("o.department_id = :department_id")
        params["department_id"] = department_id

    sql = f"""
        SELECT o.id, o.date, o.new_patients_count, o.returning_patients_count, o.created_at,
               d.id AS dept_id, d.code AS dept_code, d.name AS dept_name,
               d.display_order AS dept_display_order, d.created_at AS dept_created_at
        FROM outpatient_records o
        JOIN departments d ON o.department_id = d.id
        {where_clause(conditions)}
        ORDER BY o.date DESC, d.code
    """
    rows = db.execute(sql, params, query_name="outpatient_records")

    records = []
    for row in rows:
        new_count = to_int(row["new_patients_count"])
        returning_count = to_int(row["returning_patients_count"])
        records.append(
            {
                "id": row["id"],
                "date": iso_date(row["date"]),
                "department": department_from_row(row, "dept_"),
                "new_patients_count": new_count,
                "returning_patients_count": returning_count,
                "total_count": new_count + returning_count,
                "created_at": iso_timestamp(row["created_at"]),
            }
        )
    return records


def outpatient_summary(
    db: Database,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Daily totals across all departments, most recent day first."""
    check_date(start_date, "startDate")
    check_date(end_date, "endDate")

    params: Dict[str, Any] = {}
    conditions = range_conditions("date", start_date, end_date, params)
    sql = f"""
        SELECT date,
               SUM(new_patients_count) AS total_new,
               SUM(returning_patients_count) AS total_returning
        FROM outpatient_records
        {where_clause(conditions)}
        GROUP BY date
        ORDER BY date DESC
    """
    rows = db.execute(sql, params, query_name="outpatient_summary")

    summary = []
    for row in rows:
        total_new = to_int(row["total_new"])
        total_returning = to_int(row["total_returning"])
        summary.append(
            {
                "date": iso_date(row["date"]),
                "total_new": total_new,
                "total_returning": total_returning,
                "total_patients": total_new + total_returning,
            }
        )
    return summary


def outpatient_by_department(
    db: Database,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Totals per department; departments without records in range report zeros.

    The date bounds sit in the join condition rather than the WHERE clause,
    otherwise the outer join would collapse to an inner one.
    """
    check_date(start_date, "startDate")
    check_date(end_date, "endDate")

    params: Dict[str, Any] = {}
    join_conditions = ["o.department_id = d.id"]
    join_conditions += range_conditions("o.date", start_date, end_date, params)
    sql = f"""
        SELECT d.id, d.code, d.name, d.display_order, d.created_at,
               COALESCE(SUM(o.new_patients_count), 0) AS total_new,
               COALESCE(SUM(o.returning_patients_count), 0) AS total_returning
        FROM departments d
        LEFT JOIN outpatient_records o ON {" AND ".join(join_conditions)}
        GROUP BY d.id, d.code, d.name, d.display_order, d.created_at
        ORDER BY d.display_order, d.code
    """
    rows = db.execute(sql, params, query_name="outpatient_by_department")

    result = []
    for row in rows:
        total_new = to_int(row["total_new"])
        total_returning = to_int(row["total_returning"])
        result.append(
            {
                "department": department_from_row(row),
                "total_new": total_new,
                "total_returning": total_returning,
                "total_patients": total_new + total_returning,
            }
        )
    return result
