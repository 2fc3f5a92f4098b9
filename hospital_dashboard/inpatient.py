from typing import Any, Dict, List, Optional

from hospital_dashboard.db_core import Database
from hospital_dashboard.filters import check_date, range_conditions, where_clause
from hospital_dashboard.shaping import (
    department_from_row,
    iso_date,
    iso_timestamp,
    to_int,
    ward_from_row,
)


def inpatient_records(
    db: Database,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    ward_id: Optional[int] = None,
    department_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    check_date(start_date, "startDate")
    check_date(end_date, "endDate")

    params: Dict[str, Any] = {}
    conditions = range_conditions("i.date", start_date, end_date, params)
    if ward_id is not None:
        conditions.append("i.ward_id = :ward_id")
        params["ward_id"] = ward_id
    if department_id is not None:
        conditions.append("i.department_id = :department_id")
        params["department_id"] = department_id

    sql = f"""
        SELECT i.id, i.date, i.current_patient_count, i.new_admission_count,
               i.discharge_count, i.transfer_out_count, i.transfer_in_count, i.created_at,
               w.id AS ward_id, w.code AS ward_code, w.name AS ward_name,
               w.capacity AS ward_capacity, w.display_order AS ward_display_order,
               w.created_at AS ward_created_at,
               d.id AS dept_id, d.code AS dept_code, d.name AS dept_name,
               d.display_order AS dept_display_order, d.created_at AS dept_created_at
        FROM inpatient_records i
        JOIN wards w ON i.ward_id = w.id
        JOIN departments d ON i.department_id = d.id
        {where_clause(conditions)}
        ORDER BY i.date DESC, w.code, d.code
    """
    rows = db.execute(sql, params, query_name="inpatient_records")

    return [
        {
            "id": row["id"],
            "date": iso_date(row["date"]),
            "ward": ward_from_row(row, "ward_"),
            "department": department_from_row(row, "dept_"),
            "current_patient_count": to_int(row["current_patient_count"]),
            "new_admission_count": to_int(row["new_admission_count"]),
            "discharge_count": to_int(row["discharge_count"]),
            "transfer_out_count": to_int(row["transfer_out_count"]),
            "transfer_in_count": to_int(row["transfer_in_count"]),
            "created_at": iso_timestamp(row["created_at"]),
        }
        for row in rows
    ]


def inpatient_summary(
    db: Database,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Daily census and patient-flow totals across all wards, most recent day first."""
    check_date(start_date, "startDate")
    check_date(end_date, "endDate")

    params: Dict[str, Any] = {}
    conditions = range_conditions("date", start_date, end_date, params)
    sql = f"""
        SELECT date,
               SUM(current_patient_count) AS total_current,
               SUM(new_admission_count) AS total_new_admission,
               SUM(discharge_count) AS total_discharge,
               SUM(transfer_out_count) AS total_transfer_out,
               SUM(transfer_in_count) AS total_transfer_in
        FROM inpatient_records
        {where_clause(conditions)}
        GROUP BY date
        ORDER BY date DESC
    """
    rows = db.execute(sql, params, query_name="inpatient_summary")

    return [
        {
            "date": iso_date(row["date"]),
            "total_current": to_int(row["total_current"]),
            "total_new_admission": to_int(row["total_new_admission"]),
            "total_discharge": to_int(row["total_discharge"]),
            "total_transfer_out": to_int(row["total_transfer_out"]),
            "total_transfer_in": to_int(row["total_transfer_in"]),
        }
        for row in rows
    ]


def inpatient_by_ward(
    db: Database,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Totals per ward; wards without records in range still appear with zeros."""
    check_date(start_date, "startDate")
    check_date(end_date, "endDate")

    params: Dict[str, Any] = {}
    join_conditions = ["i.ward_id = w.id"]
    join_conditions += range_conditions("i.date", start_date, end_date, params)
    sql = f"""
        SELECT w.id, w.code, w.name, w.capacity, w.display_order, w.created_at,
               COALESCE(SUM(i.current_patient_count), 0) AS total_current,
               COALESCE(SUM(i.new_admission_count), 0) AS total_new_admission,
               COALESCE(SUM(i.discharge_count), 0) AS total_discharge
        FROM wards w
        LEFT JOIN inpatient_records i ON {" AND ".join(join_conditions)}
        GROUP BY w.id, w.code, w.name, w.capacity, w.display_order, w.created_at
        ORDER BY w.display_order, w.code
    """
    rows = db.execute(sql, params, query_name="inpatient_by_ward")

    return [
        {
            "ward": ward_from_row(row),
            "total_current": to_int(row["total_current"]),
            "total_new_admission": to_int(row["total_new_admission"]),
            "total_discharge": to_int(row["total_discharge"]),
        }
        for row in rows
    ]
