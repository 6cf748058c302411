"""
Exception handlers translating application errors into JSON responses.
"""

import logging
import time
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pmtracker.core.exceptions import BaseAppException

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str, details: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "timestamp": int(time.time())
        }
    }


async def handle_application_exception(request: Request, exception: BaseAppException) -> JSONResponse:
    """Handle custom application exceptions"""
    log = logger.warning if exception.status_code < 500 else logger.error
    log(
        f"Application exception: {exception.error_code.value} - {exception.message}",
        extra={
            "exception_data": {
                "error_code": exception.error_code.value,
                "details": exception.details,
                "path": request.url.path,
                "method": request.method
            }
        }
    )

    return JSONResponse(
        status_code=exception.status_code,
        content=_error_body(exception.error_code.value, exception.message, exception.details)
    )


async def handle_database_error(request: Request, exception: SQLAlchemyError) -> JSONResponse:
    """Handle database exceptions that escaped the repositories"""
    logger.error(
        f"Database error on {request.method} {request.url.path}: {exception}",
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("DATABASE_ERROR", "A database error occurred", {})
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the application exception handlers to ``app``."""
    app.add_exception_handler(BaseAppException, handle_application_exception)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
