"""Global exception handlers.

The chat route maps its own faults; these handlers cover what escapes it
(dependency failures, methods the router itself rejects) so that those
responses still carry the cross-origin headers.
"""

import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopal.core.errors import ERROR_SERVER, PipelineError

from .gate import cors_headers, error_response, method_not_allowed

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on ``app``."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        if exc.status_code == 405:
            return method_not_allowed()
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=cors_headers(exc.headers),
        )

    @app.exception_handler(PipelineError)
    async def handle_pipeline_error(request: Request, exc: PipelineError) -> Response:
        return error_response(exc.category, exc.detail)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled fault outside the chat pipeline")
        return error_response(ERROR_SERVER, str(exc))
