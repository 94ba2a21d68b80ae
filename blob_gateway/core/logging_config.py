"""Logging configuration for the blob ingestion gateway."""

from pathlib import Path
import sys

from loguru import logger

from blob_gateway.core.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(settings: Settings) -> None:
    """Send gateway logs to the console, a daily file and an error-only file."""
    logs_dir = Path(settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()

    logger.add(
        sink=sys.stdout,
        format=CONSOLE_FORMAT,
        level=settings.log_level,
        colorize=True,
    )

    logger.add(
        sink=logs_dir / "gateway_{time:YYYY-MM-DD}.log",
        format=FILE_FORMAT,
        level=settings.log_level,
        rotation="00:00",
        retention=f"{settings.log_retention_days} days",
        compression="zip",
        enqueue=True,  # Uploads log from worker threads
    )

    # Rejected and failed uploads, one line each
    logger.add(
        sink=logs_dir / "gateway_errors_{time:YYYY-MM-DD}.log",
        format=FILE_FORMAT,
        level="ERROR",
        rotation="00:00",
        retention=f"{settings.error_log_retention_days} days",
        compression="zip",
        enqueue=True,
    )

    logger.info(
        f"Logging configured: level {settings.log_level}, files in {logs_dir} "
        f"(kept {settings.log_retention_days}d, errors {settings.error_log_retention_days}d)"
    )
