"""Environment driven settings for the reporting API."""

from __future__ import annotations

import os
from typing import List, Optional

from pydantic import BaseModel, Field


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    database_url: Optional[str] = None
    db_driver: str = "mysql+pymysql"
    db_host: str = "localhost"
    db_port: int = 3306
    db_name: str = "hospital_db"
    db_user: str = "hospital_user"
    db_password: str = "hospital_pass"

    pool_size: int = 10
    pool_max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1200
    connect_timeout: int = 10
    slow_query_threshold: float = 2.0

    api_title: str = "Hospital Dashboard GraphQL API"
    port: int = 4000
    loglevel: str = "info"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    graphiql: bool = True

    sales_required_level: int = 90
    enforce_access_levels: bool = False
    bootstrap_schema: bool = False

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"{self.db_driver}://{self.db_user}:{self.db_password}@"
            f"{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.sqlalchemy_url.startswith("sqlite")


def get_settings() -> Settings:
    """Build settings from the process environment, falling back to defaults."""

    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    return Settings(
        database_url=os.getenv("DATABASE_URL") or None,
        db_driver=os.getenv("DB_DRIVER", "mysql+pymysql"),
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "3306")),
        db_name=os.getenv("DB_NAME", "hospital_db"),
        db_user=os.getenv("DB_USER", "hospital_user"),
        db_password=os.getenv("DB_PASSWORD", "hospital_pass"),
        pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
        pool_max_overflow=int(os.getenv("DB_POOL_MAX_OVERFLOW", "10")),
        pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", "30")),
        pool_recycle=int(os.getenv("DB_POOL_RECYCLE", "1200")),
        connect_timeout=int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
        slow_query_threshold=float(os.getenv("SLOW_QUERY_THRESHOLD", "2.0")),
        port=int(os.getenv("PORT", "4000")),
        loglevel=os.getenv("LOGLEVEL", "info"),
        cors_origins=origins or ["*"],
        graphiql=_env_bool("GRAPHIQL", "true"),
        sales_required_level=int(os.getenv("SALES_REQUIRED_LEVEL", "90")),
        enforce_access_levels=_env_bool("ENFORCE_ACCESS_LEVELS"),
        bootstrap_schema=_env_bool("BOOTSTRAP_SCHEMA"),
    )
