"""
API exception handling.

Maps imaging errors onto HTTP responses and provides the safe_endpoint
decorator used by every router.
"""

import functools
import logging
from typing import Any, Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.exceptions import ImagingError

logger = logging.getLogger(__name__)


def safe_endpoint(func: Callable) -> Callable:
    """
    Wrap an async endpoint so engine errors become HTTP responses.

    ImagingError becomes a 400, HTTPException passes through unchanged, and
    anything else is logged with its traceback and returned as a 500.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            raise
        except ImagingError as e:
            logger.warning(f"{func.__name__}: {type(e).__name__}: {e}")
            raise HTTPException(status_code=400, detail=str(e)) from e
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}") from e

    return wrapper


async def imaging_error_handler(request: Request, exc: ImagingError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400, content={"detail": str(exc)}
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the application-wide exception handlers.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(ImagingError, imaging_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
