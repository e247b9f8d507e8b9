"""
Helpdesk - Main Application
===========================

Support ticketing service.

Modules:
- Tickets: ticket lifecycle, SLA status, filtering and dashboard statistics
- Comments: comment threads attached to tickets

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities and value objects
- Infrastructure: Database schema and Persistence Adapter
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.config import Settings, get_settings
from helpdesk.core import ApplicationException, Clock, utc_now
from helpdesk.infrastructure.database import Database
from helpdesk.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    global_exception_handler,
    request_validation_exception_handler,
)
from helpdesk.shared.infrastructure.logging import setup_logging, get_logger
from helpdesk.tickets.interfaces import tickets_router
from helpdesk.comments.interfaces import comments_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Initialize the Persistence Adapter
    3. Create database tables

    SHUTDOWN:
    1. Close database connections
    """
    settings: Settings = app.state.settings

    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting Helpdesk Service", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    database = Database.from_settings(settings)
    database.init()
    app.state.database = database

    # Note: if the database is not reachable the server still starts and
    # database-dependent endpoints fail with 500
    logger.info("Creating database tables")
    try:
        await database.create_tables()
    except ApplicationException as e:
        logger.warning(f"Database not available - running in degraded mode: {e}")

    logger.info("Helpdesk Service started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down Helpdesk Service")
    await database.close()
    app.state.database = None
    logger.info("Helpdesk Service shutdown complete")


def create_app(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Overrides the environment-derived settings
        clock: Overrides the wall clock (tests pin or step time with it)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Helpdesk API",
        description="""
    ## Support Ticketing System

    Tickets carry a priority, an assignee and an SLA clock (hours until
    breach). Each ticket owns a thread of comments.

    **SLA status** is derived on every read:
    - `Completed` - ticket is resolved or closed
    - `Overdue` - SLA hours exceeded
    - `Due Soon` - less than two hours left
    - `<N>h remaining` - otherwise
    """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.clock = clock or utc_now
    app.state.database = None

    # === Middleware (last added runs first) ===
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Exception handlers ===
    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # === Module routers ===
    app.include_router(tickets_router, prefix=settings.api_prefix)
    app.include_router(comments_router, prefix=settings.api_prefix)

    @app.get(f"{settings.api_prefix}/health", tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint for load balancers and orchestrators."""
        database: Optional[Database] = request.app.state.database
        connected = database is not None and await database.ping()
        return {
            "status": "OK" if connected else "DEGRADED",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected" if connected else "unavailable",
            "version": settings.app_version,
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "Helpdesk Service",
            "version": settings.app_version,
            "docs": "/docs",
            "health": f"{settings.api_prefix}/health",
            "modules": {
                "tickets": f"{settings.api_prefix}/tickets",
                "comments": f"{settings.api_prefix}/comments",
            }
        }

    return app


app = create_app()


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "helpdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
