from typing import Any, Dict, List

from hospital_dashboard.db_core import Database
from hospital_dashboard.shaping import department_from_row, ward_from_row


def list_departments(db: Database) -> List[Dict[str, Any]]:
    rows = db.execute(
        """
        SELECT id, code, name, display_order, created_at
        FROM departments
        ORDER BY display_order, code
        """,
        query_name="departments",
    )
    return [department_from_row(row) for row in rows]


def list_wards(db: Database) -> List[Dict[str, Any]]:
    rows = db.execute(
        """
        SELECT id, code, name, capacity, display_order, created_at
        FROM wards
        ORDER BY display_order, code
        """,
        query_name="wards",
    )
    return [ward_from_row(row) for row in rows]
