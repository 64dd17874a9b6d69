"""
DineDash - Main Application Entry Point
Multi-tenant restaurant ordering platform
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import logging
import sys
import structlog

from dinedash.core.config import get_settings
from dinedash.core.database import init_db
from dinedash.core.errors import register_error_handlers
from dinedash.api import (
    auth, dashboard, kitchen, menu_categories, menu_items, onboarding,
    orders, otp, platform, restaurants, staff, tables, upload, waiter_calls
)

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info(f"Initializing {settings.APP_NAME} backend ({settings.ENVIRONMENT})")
    if settings.AUTO_CREATE_TABLES:
        init_db()
    else:
        logger.info("Database managed by Alembic migrations")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME} backend")


# Create FastAPI application
app = FastAPI(
    title="DineDash API",
    description="Multi-tenant restaurant ordering: QR menus, orders, kitchen and dashboards",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers (each router carries its own /api prefix)
app.include_router(auth.router)
app.include_router(platform.router)
app.include_router(onboarding.router)
app.include_router(restaurants.router)
app.include_router(menu_categories.router)
app.include_router(menu_items.router)
app.include_router(tables.router)
app.include_router(orders.router)
app.include_router(kitchen.router)
app.include_router(waiter_calls.router)
app.include_router(dashboard.router)
app.include_router(staff.router)
app.include_router(otp.router)
app.include_router(upload.router)

# Uploaded images, written by the upload endpoint
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "dinedash-api"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "DineDash API",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dinedash.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
