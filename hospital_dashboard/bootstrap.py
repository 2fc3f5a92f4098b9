"""Bootstrap helpers that prepare the reporting database on startup."""

from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from hospital_dashboard.db_core import Database
from hospital_dashboard.tables import metadata


logger = logging.getLogger(__name__)


def bootstrap_reporting_schema(db: Database) -> None:
    """Create any missing reporting tables. Existing tables and rows are left alone."""

    try:
        engine = db.get_pool()
        existing = set(inspect(engine).get_table_names())
        missing = [t.name for t in metadata.sorted_tables if t.name not in existing]
        if not missing:
            logger.debug("Reporting schema already present; no changes required")
            return

        metadata.create_all(engine, checkfirst=True)
        logger.info("Created reporting tables: %s", ", ".join(missing))
    except SQLAlchemyError as exc:  # pragma: no cover - startup guard
        logger.error("Failed to bootstrap reporting schema: %s", exc)
