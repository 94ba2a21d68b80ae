"""Global exception handlers for the FastAPI application."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from blob_gateway.core.exceptions import AppError
from blob_gateway.schemas.schemas import UploadResult

_HTTP_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


def error_response(status_code: int, message: str) -> JSONResponse:
    """Log an error outcome and build its JSON envelope."""
    logger.error(f"Error: {status_code} - {message}")
    return JSONResponse(
        status_code=status_code,
        content=UploadResult(success=False, message=message).to_payload(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all global exception handlers on the FastAPI app.

    Note: The nested handler functions are registered via decorators and used by FastAPI
    at runtime, but static analysis tools cannot detect this usage pattern.
    """

    @app.exception_handler(AppError)
    def app_error_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: AppError
    ) -> JSONResponse:
        response = error_response(exc.status_code, exc.message)
        response.headers.update(exc.headers)
        return response

    @app.exception_handler(StarletteHTTPException)
    def http_exception_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
        response = error_response(exc.status_code, message)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    def request_validation_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug(f"Request validation failed: {exc.errors()}")
        return error_response(400, "Invalid request payload")

    @app.exception_handler(Exception)
    def unhandled_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(f"Unhandled exception: {exc}")
        return error_response(500, "Internal server error")
