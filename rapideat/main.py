"""
RapidEat - Main FastAPI Application.

Entry point for the backend API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rapideat.core.config import settings
from rapideat.core.database import dispose_engine, init_db
from rapideat.core.exceptions import StoreUnavailable
from rapideat.api.v1.router import api_router
from rapideat.services.auth import to_form_state

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    if settings.has_database_config:
        try:
            await init_db()
            logger.info("Database initialized")
        except StoreUnavailable:
            logger.warning("Database unreachable at startup; catalog will use static data")
    else:
        logger.warning("DATABASE_URL not set; auth is unavailable and catalog uses static data")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await dispose_engine()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Restaurant discovery with cookie-session authentication",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # Frontend dev server
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    """Database could not be opened for the request."""
    return JSONResponse(
        status_code=503,
        content=to_form_state(exc).model_dump(mode="json", exclude_none=True),
    )


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "name": settings.app_name,
        "status": "running",
        "version": "0.1.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
