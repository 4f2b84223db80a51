"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from splitbill_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from splitbill_gateway.api.v1 import settlement, payment
from splitbill_gateway.infrastructure.observability.logging import setup_logging
from splitbill_gateway.config import settings

setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Split Bill Gateway",
        description="Group balance and settlement service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs first, so request IDs exist before metrics are taken
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(settlement.router, prefix="/v1", tags=["settlements"])
    app.include_router(payment.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()
