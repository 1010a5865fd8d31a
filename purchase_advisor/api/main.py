"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from purchase_advisor.api.middleware import RequestIDMiddleware, MetricsMiddleware
from purchase_advisor.api.v1 import classify, decision, history, profile
from purchase_advisor.infrastructure.database.models import Base
from purchase_advisor.infrastructure.database.session import engine
from purchase_advisor.infrastructure.observability.logging import setup_logging
from purchase_advisor.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables on startup (no-op when they exist)
    Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Purchase Advisor",
        description="Weighted multi-criteria Buy / Don't Buy recommendations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers; history before decision so /decision/history
    # is not captured by /decision/{decision_id}
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(decision.router, prefix="/v1", tags=["decisions"])
    app.include_router(profile.router, prefix="/v1", tags=["profile"])
    app.include_router(classify.router, prefix="/v1", tags=["classification"])

    return app


app = create_app()
