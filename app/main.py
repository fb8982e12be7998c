"""
Knowledge Base - Main Application Entry Point
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from app.api import domains, articles, projects, search
from app.api.errors import (
    InvalidDataError,
    format_validation_errors,
    invalid_data_response,
    resource_kind,
)
from app.config import Settings, settings as default_settings
from app.domain.entities import DomainInUseError
from app.repositories import create_storage
from app.version import __version__
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, default_settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# Development origins (local frontend dev server)
DEV_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around an explicit settings object.

    The storage instance is created in the lifespan handler and lives on
    app.state, so each app (and each test) owns its own store.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager - handles startup and shutdown"""
        # Startup
        logger.info("🚀 Starting Knowledge Base")
        logger.info(f"📦 Version: {__version__}")
        logger.info(f"📝 Environment: {settings.environment}")

        storage = create_storage(settings)
        await storage.initialize()
        app.state.storage = storage

        logger.info("✅ Storage ready")

        yield

        # Shutdown
        logger.info("Shutting down...")
        await storage.close()

    app = FastAPI(
        title="Knowledge Base",
        description="Personal knowledge base: articles and portfolio projects organized by domain",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    # ============================================
    # CORS Middleware Configuration
    # ============================================
    # Set CORS_ORIGINS as comma-separated list: "https://example.com,https://www.example.com"
    production_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    allowed_origins = DEV_ORIGINS + production_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ============================================
    # Error handlers
    # ============================================

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report per-field validation failures as 400 Invalid <kind> data"""
        errors = format_validation_errors(exc.errors())
        logger.warning(f"Validation error for {request.method} {request.url.path}: {errors}")
        return invalid_data_response(resource_kind(request.url.path), errors)

    @app.exception_handler(InvalidDataError)
    async def invalid_data_handler(request: Request, exc: InvalidDataError):
        return invalid_data_response(exc.kind, exc.errors)

    @app.exception_handler(DomainInUseError)
    async def domain_in_use_handler(request: Request, exc: DomainInUseError):
        logger.warning(f"Refused to delete domain in use: {exc}")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "detail": str(exc),
                "articles": exc.articles,
                "projects": exc.projects,
            }
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        """Log the traceback, return nothing internal to the client"""
        logger.exception(f"Unhandled error for {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"}
        )

    # Register API routes
    app.include_router(domains.router, prefix="/api", tags=["domains"])
    app.include_router(articles.router, prefix="/api", tags=["articles"])
    app.include_router(projects.router, prefix="/api", tags=["projects"])
    app.include_router(search.router, prefix="/api", tags=["search"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "app": "Knowledge Base",
            "version": __version__,
            "status": "running",
            "environment": settings.environment,
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": settings.environment
        }

    logger.debug(f"CORS configured for origins: {allowed_origins}")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
