"""
Main FastAPI application for Booth Leads.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import leads, analytics, foot_traffic, crm, insights, export
from .services import get_services, initialize_services
from .middleware.metrics import MetricsMiddleware, metrics_endpoint
from config.settings import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Booth Leads starting up...")
    initialize_services()
    logger.info("Booth Leads ready")
    yield
    logger.info("Booth Leads shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.api_title,
        description="Trade show lead capture with scoring, segmentation, booth analytics and CRM sync.",
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics middleware
    app.add_middleware(MetricsMiddleware)

    # --- Leads ---
    app.include_router(leads.router, prefix="/api/v1", tags=["Leads"])

    # --- Booth analytics ---
    app.include_router(analytics.router, prefix="/api/v1", tags=["Analytics"])
    app.include_router(foot_traffic.router, prefix="/api/v1", tags=["Foot Traffic"])

    # --- CRM ---
    app.include_router(crm.router, prefix="/api/v1", tags=["CRM"])

    # --- AI insights ---
    app.include_router(insights.router, prefix="/api/v1", tags=["Insights"])

    # --- Export ---
    app.include_router(export.router, prefix="/api/v1", tags=["Export"])

    # --- Prometheus metrics endpoint ---
    app.get("/metrics", tags=["Monitoring"])(metrics_endpoint)

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "status": "operational",
            "docs": "/docs",
        }

    # Health check
    @app.get("/health")
    async def health():
        services = get_services()
        return {
            "status": "healthy" if services.is_ready else "degraded",
            "services": services.health(),
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
