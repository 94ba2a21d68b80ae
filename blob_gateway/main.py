"""FastAPI application for the blob ingestion gateway."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
import uvicorn

from blob_gateway.api.router import api_router
from blob_gateway.core.config import get_settings
from blob_gateway.core.error_handlers import register_exception_handlers
from blob_gateway.core.logging_config import configure_logging


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting blob ingestion gateway...")
    missing = settings.missing_credentials()
    if missing:
        logger.warning(
            f"Storage credentials not configured ({', '.join(missing)}); "
            "uploads will fail until they are set"
        )
    if settings.target_folder_id:
        logger.info(f"Uploads target folder {settings.target_folder_id}")
    else:
        logger.info("Uploads target the storage root folder")
    await asyncio.sleep(0)  # Satisfy RUF029 (async function must await)
    logger.success("Application startup complete")
    yield
    logger.info("Shutting down blob ingestion gateway...")


app = FastAPI(title="Blob Ingestion Gateway", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/")
def read_root() -> dict[str, str]:
    """Return a liveness message for the root endpoint."""
    logger.debug("Root endpoint accessed")
    return {"message": "Blob ingestion gateway is running"}


def run() -> None:
    """Serve the application on HOST:PORT."""
    settings = get_settings()
    logger.info(f"Server listening on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
