"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admin_console.api import assignments, dashboard, plans
from admin_console.config import get_settings
from admin_console.services.dashboard_controller import DashboardController
from admin_console.services.store import build_store

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store and the dashboard controller; close the controller on shutdown."""
    logging.basicConfig(level=settings.log_level.upper())
    app.state.controller = DashboardController(build_store(settings), settings)
    logger.info(f"Admin console started with the {settings.store_backend} store")
    yield
    app.state.controller.close()


app = FastAPI(
    title="Nutrition Admin Console API",
    description="Meal plan dashboard, plan lifecycle and user plan assignment",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://localhost:8080",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(dashboard.router)
app.include_router(plans.router)
app.include_router(assignments.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "store_backend": settings.store_backend,
    }
