"""FastAPI application factory"""

import logging
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from sme_readiness.api.dependencies import get_catalog
from sme_readiness.api.middleware import RequestIDMiddleware, MetricsMiddleware
from sme_readiness.api.v1 import assessment, history, questions
from sme_readiness.infrastructure.observability.logging import setup_logging
from sme_readiness.infrastructure.database.session import init_db
from sme_readiness.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    # Load the question catalog up front so a broken catalog fails at startup
    catalog = get_catalog()

    if settings.create_tables:
        try:
            init_db()
        except SQLAlchemyError as e:
            # Assessments are still scored; saves report persisted=false
            logging.error(f"Database initialization failed: {e}")

    app = FastAPI(
        title="SME Investment Readiness",
        description="Business risk and funding readiness assessment service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "catalog_version": catalog.version}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(assessment.router, prefix="/v1", tags=["assessments"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(questions.router, prefix="/v1", tags=["questions"])

    return app


app = create_app()
