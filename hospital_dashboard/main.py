import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from hospital_dashboard.bootstrap import bootstrap_reporting_schema
from hospital_dashboard.config import Settings, get_settings
from hospital_dashboard.db_core import Database
from hospital_dashboard.routers.graphql import build_router

log_level = {"debug": logging.DEBUG, "info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR,
             "critical": logging.CRITICAL}

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=log_level.get(settings.loglevel.lower(), logging.INFO))

    app = FastAPI(title=settings.api_title)
    app.state.settings = settings
    app.state.database = database or Database(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],   # Includes OPTIONS
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"message": f"{settings.api_title} is running", "graphql": "/graphql"}

    @app.get("/health")
    def health():
        try:
            app.state.database.ping()
        except SQLAlchemyError as e:
            raise HTTPException(status_code=503, detail=f"Database unavailable: {str(e)}")
        return {"status": "ok"}

    app.include_router(build_router(settings.graphiql), prefix="/graphql")

    @app.on_event("startup")
    def _startup() -> None:
        if settings.bootstrap_schema:
            bootstrap_reporting_schema(app.state.database)
        logger.info("Hospital GraphQL server ready on port %s at /graphql", settings.port)

    @app.on_event("shutdown")
    def _shutdown() -> None:
        logger.info("Shutdown requested, closing database pool")
        app.state.database.close_pool()

    return app


app = create_app()
