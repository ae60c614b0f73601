"""
Event Registration API - Main Application Entry Point

An event-registration backend demonstrating:
- Capacity-bounded registration in a single row-locked transaction
- Result-based domain errors with one exhaustive error-to-HTTP mapping
- Structured logging with request correlation
- A lifespan-owned database handle injected into every request
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from eventhub.core.config import Settings, get_settings
from eventhub.core.logging import setup_logging, get_logger
from eventhub.core.metrics import metrics_endpoint
from eventhub.api.errors import register_exception_handlers
from eventhub.api.middleware import RequestLoggingMiddleware
from eventhub.api.router import build_api_router
from eventhub.db.session import Database


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle: owns the database handle."""
        setup_logging(settings)
        logger = get_logger(__name__)

        logger.info(
            "application_starting",
            app=settings.APP_NAME,
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
        )

        database = Database.from_settings(settings)
        if settings.DB_CREATE_TABLES:
            await database.create_all()
            logger.info("database_tables_created")
        app.state.database = database

        yield

        await database.dispose()
        logger.info("application_shutdown")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Event registration API with capacity-safe registrations",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(build_api_router(settings.API_PREFIX))

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint for Docker and load balancers."""
        database_ok = await request.app.state.database.ping()
        return {
            "status": "healthy" if database_ok else "degraded",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "database": "up" if database_ok else "down",
        }

    @app.get("/metrics", tags=["Health"], include_in_schema=False)
    async def metrics():
        return metrics_endpoint()

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs",
        }

    return app


app = create_app()
