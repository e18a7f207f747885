"""Exception handlers for the Ordering API.

Protean's handlers cover validation (400) and not-found (404) errors; the
handlers here add authorization failures and rolled-back commits.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from ordering.shared.errors import Forbidden, TransactionFailure

logger = structlog.get_logger(__name__)


async def _forbidden(request: Request, exc: Forbidden) -> JSONResponse:
    logger.info("Request forbidden", path=request.url.path, reason=exc.message)
    return JSONResponse(status_code=403, content={"error": exc.message})


async def _transaction_failure(request: Request, exc: TransactionFailure) -> JSONResponse:
    logger.error("Request rolled back", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(Forbidden, _forbidden)
    app.add_exception_handler(TransactionFailure, _transaction_failure)
