"""Main FastAPI Application

ASGI gateway in front of the job portal backend API. This module wires
middleware, global exception handlers, and the routers from `presentation`.

Run locally for development with:

    uvicorn main:app --reload --port 3000

Forwarding logic lives in `infrastructure.proxy`; keep this file to wiring.
"""
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from core.config import settings
from core.logging_config import logger
from core.http_client import init_http_client, close_http_client
from core.exceptions import (
    DomainException,
    AuthenticationException,
    AuthorizationException,
    ValidationException,
    ResourceNotFoundException,
    ApiError,
)
from presentation.api.endpoints import auth_router, profile_router, proxy_router, session_router
from presentation.api.schemas.envelope import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info(f"🚀 Starting {settings.APP_NAME} ({settings.ENVIRONMENT}) -> {settings.BACKEND_API_URL}")

    await init_http_client()
    logger.info("✅ Backend HTTP client ready")

    yield

    # Shutdown
    logger.info("👋 Shutting down gracefully...")
    await close_http_client()
    logger.info("✅ Backend HTTP client closed")


def create_app() -> FastAPI:
    """Build the gateway application"""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Gateway forwarding job portal API calls to the backend",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None
    )

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global Exception Handlers
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        """Handle domain-level exceptions"""
        logger.warning(f"Domain exception on {request.method} {request.url.path}: {str(exc)}")

        if isinstance(exc, AuthenticationException):
            status_code = status.HTTP_401_UNAUTHORIZED
        elif isinstance(exc, AuthorizationException):
            status_code = status.HTTP_403_FORBIDDEN
        elif isinstance(exc, ValidationException):
            status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        elif isinstance(exc, ResourceNotFoundException):
            status_code = status.HTTP_404_NOT_FOUND
        elif isinstance(exc, ApiError) and exc.status_code:
            status_code = exc.status_code
        else:
            status_code = status.HTTP_400_BAD_REQUEST

        return JSONResponse(
            status_code=status_code,
            content={"success": False, "message": str(exc)}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler"""
        logger.opt(exception=exc).error(f"Unhandled exception: {str(exc)}")

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"}
        )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint for deployment monitoring"""
        return {
            "status": "healthy",
            "service": "job-portal-gateway",
            "version": settings.APP_VERSION
        }

    # Local session lookup
    app.include_router(
        session_router,
        prefix="/session",
        tags=["Session"]
    )

    # Specific proxy routes first; the catch-all must stay last
    app.include_router(
        auth_router,
        prefix="/api/auth",
        tags=["Authentication"]
    )

    app.include_router(
        profile_router,
        prefix="/api/profile",
        tags=["Profile"]
    )

    app.include_router(
        proxy_router,
        prefix="/api",
        tags=["Proxy"]
    )

    # Files written by FileUploadService
    upload_dir = Path(settings.UPLOAD_DIR)
    if upload_dir.is_dir():
        app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=3000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
