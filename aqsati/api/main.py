"""FastAPI application factory"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from aqsati.api.middleware import RequestIDMiddleware, MetricsMiddleware
from aqsati.api.v1 import clients, installments, reminders, reports, transfer
from aqsati.domain.exceptions import ClientNotFoundError, InstallmentNotFoundError
from aqsati.infrastructure.observability.logging import setup_logging
from aqsati.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Aqsati",
        description="Installment tracking: clients, payments, status and reports",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(ClientNotFoundError)
    @app.exception_handler(InstallmentNotFoundError)
    async def not_found_handler(request: Request, exc: Exception):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(clients.router, prefix="/v1", tags=["clients"])
    app.include_router(installments.router, prefix="/v1", tags=["installments"])
    app.include_router(reminders.router, prefix="/v1", tags=["reminders"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])
    app.include_router(transfer.router, prefix="/v1", tags=["transfer"])

    return app


app = create_app()
