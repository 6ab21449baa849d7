"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from queuedesk.config import settings
from queuedesk.database import lifespan_db
from queuedesk.services.errors import AppError
from queuedesk.utils.logging import get_logger, setup_logging

# Setup logging
setup_logging(debug=settings.debug)
logger = get_logger("queuedesk.main")

# Import routers
from queuedesk.api import (  # noqa: E402
    activity_logs_router,
    appointments_router,
    auth_router,
    dashboard_router,
    queue_router,
    services_router,
    setup_router,
    staff_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    async with lifespan_db():
        yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Appointment booking and staff queue manager",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.detail)
        detail = "Internal server error"
    else:
        detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail, "error": exc.kind},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error": "internal"},
    )


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
app.include_router(staff_router, prefix="/staff", tags=["Staff"])
app.include_router(services_router, prefix="/services", tags=["Services"])
app.include_router(appointments_router, prefix="/appointments", tags=["Appointments"])
app.include_router(queue_router, prefix="/queue", tags=["Queue"])
app.include_router(activity_logs_router, prefix="/activity-logs", tags=["Activity"])
app.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
app.include_router(setup_router, prefix="/setup", tags=["Setup"])


@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "database": "connected",
    }
