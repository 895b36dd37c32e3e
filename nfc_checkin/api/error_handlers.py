# =======================================================================================
# nfc_checkin/api/error_handlers.py - Exception Handlers
# =======================================================================================
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from ..utils.exceptions import CheckinError

logger = logging.getLogger("nfc_checkin.api")


def register_error_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses."""

    @app.exception_handler(CheckinError)
    async def checkin_error_handler(request: Request, exc: CheckinError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log("%s on %s: %s", exc.code, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())
