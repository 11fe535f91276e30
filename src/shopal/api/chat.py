"""Chat endpoint.

The service answers on every path: non-POST methods are settled by the
Request Gate, POST runs the chat pipeline.
"""

import logging

from fastapi import APIRouter, Request, Response

from shopal.core.errors import ERROR_SERVER, PipelineError
from shopal.infra.telemetry import (
    ATTR_CHAT_ERROR_CATEGORY,
    ATTR_CHAT_PARSING_MODE,
    SPAN_CHAT_PIPELINE,
    tracer,
)

from .body import normalize_body
from .deps import AppConfigDep, ChatServiceDep
from .gate import GATED_METHODS, error_response, gate, json_response

logger = logging.getLogger(__name__)

CATCH_ALL_PATH = "/{path:path}"

router = APIRouter(tags=["chat"])


@router.post(CATCH_ALL_PATH)
async def chat(
    request: Request,
    config: AppConfigDep,
    chat_service: ChatServiceDep,
) -> Response:
    """Answer a customer message with a model reply and matched products.

    Any fault between reading the body and receiving the completion is
    turned into a 500 ``{"error", "detail"}`` JSON response.
    """
    with tracer.start_as_current_span(SPAN_CHAT_PIPELINE) as span:
        span.set_attribute(ATTR_CHAT_PARSING_MODE, config.chat.parsing_mode)
        try:
            chat_request = await normalize_body(request, config.chat)
            chat_response = await chat_service.respond(chat_request)
        except PipelineError as exc:
            span.set_attribute(ATTR_CHAT_ERROR_CATEGORY, exc.category)
            logger.warning(
                "Chat request failed (%s): %s", exc.category, type(exc).__name__
            )
            return error_response(exc.category, exc.detail)
        except Exception as exc:
            span.set_attribute(ATTR_CHAT_ERROR_CATEGORY, ERROR_SERVER)
            logger.exception("Unexpected fault in chat pipeline")
            return error_response(ERROR_SERVER, str(exc))

    return json_response(chat_response.to_json())


@router.api_route(CATCH_ALL_PATH, methods=GATED_METHODS)
async def gated(request: Request) -> Response:
    """Preflight, liveness check and unsupported methods; POST never lands here."""
    return gate(request.method)
