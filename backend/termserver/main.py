"""Terminology API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - FHIR routers mounted once per configured base URL (/r4, /r5, /r6)
    - Global error handlers map TermServerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Health and stats stay unversioned; they describe the process, not a FHIR release
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from termserver.api.error_handlers import register_error_handlers
from termserver.api.routes import capability, codesystem, conceptmap, health, valueset
from termserver.config import get_settings
from termserver.infrastructure import database
from termserver.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

FHIR_ROUTERS = (
    capability.router, codesystem.router, valueset.router, conceptmap.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"Terminology API started on {settings.bind_address}")
    yield
    logger.info("Terminology API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="FHIR Terminology API",
        version=settings.software_version,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    for fhir_version in settings.fhir_versions:
        for router in FHIR_ROUTERS:
            app.include_router(router, prefix=f"/{fhir_version}")

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "termserver.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
