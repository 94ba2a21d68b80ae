from fastapi import APIRouter
from loguru import logger

from blob_gateway.api.endpoints import upload

logger.info("Initializing API router")
api_router = APIRouter()

logger.debug("Registering upload endpoint")
api_router.include_router(upload.router, tags=["upload"])
logger.success("API router initialized successfully")
