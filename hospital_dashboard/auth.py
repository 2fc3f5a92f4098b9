"""Staff lookup and permission-level checks.

The staff identifier is the whole credential: there are no passwords, tokens or
sessions. ``verify_staff`` returning ``None`` is the "unauthenticated" signal,
not an error.
"""

import logging
from typing import Any, Dict, Optional

from hospital_dashboard.db_core import Database
from hospital_dashboard.exceptions import AccessDenied
from hospital_dashboard.filters import require_code
from hospital_dashboard.shaping import iso_timestamp, to_int

logger = logging.getLogger(__name__)


def verify_staff(db: Database, staff_id: str) -> Optional[Dict[str, Any]]:
    require_code(staff_id, "staffId")
    rows = db.execute(
        """
        SELECT s.id, s.name, s.job_type_code, s.created_at,
               p.job_type_name, p.level
        FROM staff s
        JOIN permissions p ON s.job_type_code = p.job_type_code
        WHERE s.id = :staff_id
        """,
        {"staff_id": staff_id},
        query_name="verify_staff",
    )
    if not rows:
        logger.info("Staff lookup found no match")
        return None

    row = rows[0]
    return {
        "id": row["id"],
        "name": row["name"],
        "job_type_code": row["job_type_code"],
        "permission": {
            "job_type_code": row["job_type_code"],
            "job_type_name": row["job_type_name"],
            "level": to_int(row["level"]),
        },
        "created_at": iso_timestamp(row["created_at"]),
    }


def has_permission(staff: Optional[Dict[str, Any]], required_level: int) -> bool:
    if not staff:
        return False
    return staff["permission"]["level"] >= required_level


def require_level(staff: Optional[Dict[str, Any]], required_level: int) -> Dict[str, Any]:
    """Return ``staff`` when it unlocks ``required_level``; raise ``AccessDenied`` otherwise."""
    if not staff:
        raise AccessDenied("Staff identifier not recognised", required_level)
    level = staff["permission"]["level"]
    if level < required_level:
        raise AccessDenied(
            f"Permission level {level} is below the required level {required_level}",
            required_level,
            level,
        )
    return staff
