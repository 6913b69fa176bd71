"""FastAPI application entry point for PhysioCare."""

import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.dependencies import _check_local_mode, get_diagnostics_log, get_error_bus
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

# Get settings
settings = get_settings()

# Configure logging
configure_logging(debug=settings.debug)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown events."""
    # Startup event
    logger.info(f"Starting {settings.app_name} API {settings.api_version}")

    detach_diagnostics = get_diagnostics_log(settings).attach(get_error_bus())
    logger.info("Permission error diagnostics attached to the error bus")

    logger.info(f"Running in {settings.environment} mode")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Store backend: {'LocalStore' if _check_local_mode() else 'Firestore'}")

    yield

    # Shutdown event
    detach_diagnostics()
    logger.info(f"Shutting down {settings.app_name} API")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Physiotherapy clinic backend: catalog, bookings, subscriptions and AI helpers",
    version=settings.api_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ── Middleware (order matters: last-added = outermost = first to run) ──

# 1. Error handler added first → innermost layer
app.add_middleware(ErrorHandlerMiddleware)

# 2. CORS added last → outermost layer (processes OPTIONS preflight first)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# Include API routers
from app.api.v1.router import router as v1_router  # noqa: E402

app.include_router(v1_router)


@app.get(
    "/health",
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Health check endpoint",
)
async def health_check() -> JSONResponse:
    """Health check endpoint for monitoring."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "success": True,
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
        },
    )


@app.get(
    "/",
    status_code=status.HTTP_200_OK,
    tags=["Root"],
    summary="Welcome endpoint",
)
async def root() -> JSONResponse:
    """Root endpoint with welcome message."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "success": True,
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "docs_url": "/docs",
            "redoc_url": "/redoc",
        },
    )


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
