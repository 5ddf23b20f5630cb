from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lispy.core.context import get_request_id

logger = logging.getLogger("lispy.errors")


class LispyError(Exception):
    status_code: int = 500
    error_type: str = "LISPY_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LispyParseError(LispyError):
    """Input text that does not form an expression. Never produced by the evaluator itself."""

    status_code = 400
    error_type = "PARSE_ERROR"


class MalformedTreeError(LispyError):
    """A tree handed to the evaluator does not have the shape the reader guarantees."""

    status_code = 500
    error_type = "MALFORMED_TREE"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LispyError)
    async def handle_lispy_error(request: Request, exc: LispyError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request.failed", extra={"error_type": exc.error_type, "path": request.url.path})

        payload = {
            "error": {
                "type": exc.error_type,
                "message": exc.message,
            }
        }
        if exc.details:
            payload["error"]["details"] = exc.details
        trace_id = get_request_id()
        if trace_id:
            payload["error"]["traceId"] = trace_id

        return JSONResponse(status_code=exc.status_code, content=payload)
