import logging
import time
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine

from hospital_dashboard.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """Owns the process-wide connection pool.

    The engine is created on first use and memoized until ``close_pool`` disposes
    of it; the next ``get_pool`` call builds a fresh one from the same settings.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._engine: Optional[Engine] = None

    def get_pool(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        settings = self.settings
        if settings.is_sqlite:
            engine = create_engine(
                settings.sqlalchemy_url,
                connect_args={"check_same_thread": False},
                echo=False,
            )
        else:
            engine = create_engine(
                settings.sqlalchemy_url,
                pool_size=settings.pool_size,
                max_overflow=settings.pool_max_overflow,
                pool_recycle=settings.pool_recycle,
                pool_pre_ping=True,
                pool_timeout=settings.pool_timeout,
                connect_args={"connect_timeout": settings.connect_timeout},
                echo=False,
            )

        # Idle connections that die are invalidated by the pool; report and carry on.
        @event.listens_for(engine, "invalidate")
        def _on_invalidate(dbapi_connection, connection_record, exception):
            if exception is not None:
                logger.error("Unexpected error on idle database connection: %s", exception)

        logger.info("Created database pool for %s", engine.url.render_as_string(hide_password=True))
        return engine

    def execute(
        self,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        query_name: str = "query",
    ) -> List[Dict[str, Any]]:
        """Run one parameterized statement and return its rows as plain dicts.

        Values only ever travel as bind parameters; ``sql`` is assembled from
        fixed fragments by the callers.
        """
        engine = self.get_pool()
        start_time = time.time()
        try:
            with engine.connect() as conn:
                result = conn.execute(text(sql), params or {})
                rows = [dict(row) for row in result.mappings()]
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                f"QUERY ERROR after {execution_time:.2f}s: {query_name}\n"
                f"Query: {sql[:200]}...\n"
                f"Error: {str(e)}"
            )
            raise

        execution_time = time.time() - start_time
        if execution_time > self.settings.slow_query_threshold:
            logger.warning(
                f"SLOW QUERY detected: {query_name} took {execution_time:.2f}s\n"
                f"Query: {sql[:200]}...\n"
                f"Params: {params}"
            )
        else:
            logger.debug("%s returned %d rows in %.3fs", query_name, len(rows), execution_time)
        return rows

    def ping(self) -> bool:
        self.execute("SELECT 1 AS ok", query_name="ping")
        return True

    def close_pool(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Database pool closed")
