"""Exception handlers that turn domain errors into the API's JSON envelope."""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from app.core.exceptions import AppError
from app.core.logging import logger


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    """
    Handle a NotFound, Conflict or BadRequest error.

    Args:
        request: The incoming HTTP request.
        exc: The domain error.

    Returns:
        The envelope with ``success`` false and the error message.
    """
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "data": [], "message": exc.message},
    )


async def handle_general_exception(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and answer 500 without leaking internals."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "data": [], "message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(Exception, handle_general_exception)
