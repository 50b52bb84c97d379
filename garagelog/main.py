"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from garagelog.api import alerts, auth, jobs, labels, tasks, users, vehicles
from garagelog.config import get_settings
from garagelog.database import init_db
from garagelog.errors import (
    GarageLogError,
    NoRowsAffected,
    NotFound,
    NotModified,
    StorageFailure,
    Unauthenticated,
    Unauthorized,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

settings = get_settings()

ERROR_STATUS: dict[type[GarageLogError], int] = {
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    NoRowsAffected: status.HTTP_404_NOT_FOUND,
    NotModified: status.HTTP_304_NOT_MODIFIED,
    StorageFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # Schema is owned by alembic outside development
    if settings.is_development:
        init_db()
    yield


app = FastAPI(
    title="GarageLog API",
    description="Self-hosted vehicle maintenance tracker",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(GarageLogError)
async def garagelog_error_handler(request: Request, exc: GarageLogError) -> Response:
    """Map core error kinds onto HTTP status codes."""
    status_code = next(
        (code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code == status.HTTP_304_NOT_MODIFIED:
        # 304 responses carry no body
        return Response(status_code=status_code)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=status_code, content={"detail": exc.message}, headers=headers)


# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(vehicles.router)
app.include_router(jobs.router)
app.include_router(tasks.router)
app.include_router(alerts.router)
app.include_router(labels.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
