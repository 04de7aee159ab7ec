"""
Coach.ai - Main FastAPI Application
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .config import settings
from .api import profile_router, sessions_router, reports_router
from .core.errors import InferenceError, NotFoundError, StorageError, ValidationError
from .core.ingestion import IngestionPipeline
from .core.logging_config import setup_logging
from .core.profile_service import ProfileDefaults, ProfileService
from .inference.factory import create_analysis_provider
from .middleware import RequestLoggingMiddleware
from .storage import LocalStorage, MemoryStorage, StorageInterface

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


def create_storage() -> StorageInterface:
    """Storage backend selected by settings.storage_type."""
    if settings.storage_type == "local":
        return LocalStorage(settings.local_storage_path)
    if settings.storage_type == "memory":
        return MemoryStorage()
    raise ValueError(f"Unsupported storage type: {settings.storage_type}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    setup_logging(settings)

    service = ProfileService(
        create_storage(),
        settings.profile_id,
        defaults=ProfileDefaults(
            name=settings.default_name,
            avatar=settings.default_avatar,
            dob=settings.default_dob,
            weight=settings.default_weight_kg,
        ),
    )
    await service.load()

    provider = create_analysis_provider(
        provider=settings.analysis_provider,
        api_key=settings.analysis_api_key,
        base_url=settings.analysis_base_url,
        model=settings.analysis_model,
        timeout=settings.analysis_timeout,
    )
    app.state.profile_service = service
    app.state.ingestion_pipeline = IngestionPipeline(service, provider=provider)

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage: {settings.storage_type} ({settings.local_storage_path})")
    logger.info(f"Analysis service: {'configured' if provider else 'not configured'}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Personal workout tracking with AI video analysis",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.reason, "field": exc.field},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage unavailable", "key": exc.key},
    )


@app.exception_handler(InferenceError)
async def inference_error_handler(request: Request, exc: InferenceError):
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": exc.reason})


# Include routers
app.include_router(profile_router)
app.include_router(sessions_router)
app.include_router(reports_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "storage": settings.storage_type,
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "coachai.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
