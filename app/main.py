"""
Subscription Tracker - FastAPI Application
Tracks user subscriptions to paid services and aggregates their cost.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from datetime import datetime, timezone

import uvicorn

from app.config import settings
from app.core.logging import configure_logging
from app.database import check_database_connection, dispose_engine, init_db
from app.api.errors import register_exception_handlers
from app.api.routes import health
from app.api.v1 import subscriptions

configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    logger.info(f"Starting {settings.app_name}...")

    if settings.db_auto_create:
        try:
            init_db()
        except Exception as e:
            logger.error(f"Database initialization failed: {str(e)}")
    if not check_database_connection():
        logger.error("Database is unreachable, requests will fail until it recovers")

    logger.info(f"API running on {settings.app_env} environment")
    yield
    # Shutdown
    dispose_engine()
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="API for aggregating users' online subscriptions",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
async def root() -> dict:
    return {
        "name": settings.app_name,
        "environment": settings.app_env,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(health.router, prefix=settings.api_v1_prefix, tags=["Health"])
app.include_router(
    subscriptions.router,
    prefix=f"{settings.api_v1_prefix}/subscriptions",
    tags=["Subscriptions"],
)


def run() -> None:
    """Serve the app; uvicorn drains in-flight requests on SIGINT/SIGTERM."""
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )


if __name__ == "__main__":
    run()
