"""Main FastAPI application entry point"""

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.bookings import router as bookings_router
from src.api.dependencies import get_object_store
from src.api.errors import request_validation_exception_handler
from src.api.health import router as health_router
from src.api.images import router as images_router
from src.api.projects import router as projects_router
from src.config import settings
from src.database import dispose_engine, init_models
from src.services.object_store import ObjectStoreError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Bootstrap the schema and check the object store; dispose the engine on shutdown"""
    await init_models()
    logger.info("Database initialized")

    try:
        await asyncio.to_thread(get_object_store().check_connection)
        logger.info("Object store connected successfully")
    except ObjectStoreError as e:
        logger.error(f"Object store connection error: {e}")

    yield

    await dispose_engine()
    logger.info("Database connections closed")


app = FastAPI(
    title="Builder Portfolio API",
    description="Backend API for portfolio projects, project images and booking requests",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)

app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

# Include routers
app.include_router(health_router)
app.include_router(projects_router)
app.include_router(images_router)
app.include_router(bookings_router)


def run() -> None:
    """Serve the API with uvicorn on the configured host and port"""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
