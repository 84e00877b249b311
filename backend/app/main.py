# backend/app/main.py
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.constants import BRAND_NAME
from .errors import register_error_handlers
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes import health, prometheus
from .routes.v1 import (
    approvals as approvals_v1,
    auth as auth_v1,
    availability as availability_v1,
    bookings as bookings_v1,
    catalog as catalog_v1,
    dashboard as dashboard_v1,
    events as events_v1,
    notifications as notifications_v1,
)

API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Booking marketplace connecting artists with venues"
API_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")

    if settings.create_tables_on_startup:
        from .database import init_db

        init_db()

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

# Register unified error envelope handlers
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(PrometheusMiddleware)

api_v1 = APIRouter(prefix="/api/v1")
api_v1.include_router(auth_v1.router, prefix="/auth")
api_v1.include_router(bookings_v1.router, prefix="/bookings")
api_v1.include_router(events_v1.router, prefix="/events")
api_v1.include_router(approvals_v1.router, prefix="/approvals")
api_v1.include_router(notifications_v1.router, prefix="/notifications")
api_v1.include_router(availability_v1.router, prefix="/availability")
api_v1.include_router(dashboard_v1.router, prefix="/dashboard")
api_v1.include_router(catalog_v1.router)

app.include_router(api_v1)

# Infrastructure routes (unversioned)
app.include_router(health.router)
app.include_router(prometheus.router)


@app.get("/")
def read_root() -> dict[str, str]:
    """Root endpoint - API information"""
    return {"message": f"Welcome to the {BRAND_NAME} API", "version": API_VERSION, "docs": "/docs"}
