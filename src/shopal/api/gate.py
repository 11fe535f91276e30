"""Request Gate: method routing and the cross-origin header policy.

Every response the service produces goes through one of the helpers below,
so the three cross-origin headers are present on every exit path.
"""

from typing import Any

from fastapi import Response
from fastapi.responses import JSONResponse, PlainTextResponse

from .models import ErrorPayload

METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_OPTIONS = "OPTIONS"

# Methods routed to the gate; POST has its own route.
GATED_METHODS = ["GET", "HEAD", "OPTIONS", "PUT", "PATCH", "DELETE"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

HEALTH_BODY = "OK"
METHOD_NOT_ALLOWED_BODY = "Method not allowed"


def cors_headers(extra: dict[str, str] | None = None) -> dict[str, str]:
    return {**(extra or {}), **CORS_HEADERS}


def json_response(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=cors_headers())


def error_response(category: str, detail: str, status_code: int = 500) -> JSONResponse:
    payload = ErrorPayload(error=category, detail=detail)
    return json_response(payload.model_dump(), status_code)


def method_not_allowed() -> Response:
    return PlainTextResponse(
        METHOD_NOT_ALLOWED_BODY, status_code=405, headers=cors_headers()
    )


def gate(method: str) -> Response | None:
    """Answer preflight, liveness and unsupported methods.

    Returns ``None`` for ``POST``, which proceeds to the chat pipeline.
    """
    method = method.upper()
    if method == METHOD_OPTIONS:
        return Response(status_code=204, headers=cors_headers())
    if method == METHOD_GET:
        return PlainTextResponse(HEALTH_BODY, status_code=200, headers=cors_headers())
    if method != METHOD_POST:
        return method_not_allowed()
    return None
