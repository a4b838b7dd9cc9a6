"""
Raster Transform Service - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402

# Import routers  # noqa: E402
from api.routers import color, image, system, transform  # noqa: E402

# Import configuration  # noqa: E402
from config import get_settings  # noqa: E402
from core.constants import SystemConstants  # noqa: E402
from services.image_service import ImageService  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level, logging.INFO),
    format=SystemConstants.LOG_FORMAT,
)
logger = logging.getLogger(__name__)

# Suppress watchfiles debug messages
logging.getLogger("watchfiles").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    logger.info("Starting Raster Transform server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    app.state.image_service = ImageService.from_settings(settings.image)
    app.state.config = settings.to_dict()
    app.state.debug = settings.system.debug

    logger.info("Image service initialized")

    yield

    # Shutdown
    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Raster Transform",
    description="Raster image scaling, fitting, trimming and color pipeline",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(transform.router, prefix="/api/transform", tags=["Transform"])
app.include_router(color.router, prefix="/api/color", tags=["Color"])
app.include_router(image.router, prefix="/api/image", tags=["Image"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Raster Transform",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "transform": "/api/transform",
            "color": "/api/color",
            "image": "/api/image",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "image_service": getattr(app.state, "image_service", None) is not None,
        },
    }


if __name__ == "__main__":
    reload_excludes = (
        ["*.log", "*.pyc", "__pycache__", ".git", ".venv", "venv"]
        if settings.system.debug
        else None
    )

    server_config = uvicorn.Config(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        reload_excludes=reload_excludes,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )

    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")
