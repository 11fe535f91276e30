"""Body Normalizer: turn any inbound body into a ``ChatRequest``.

*strict*
    The body must be a JSON object; anything else raises ``MalformedBody``.
*lenient*
    A body declared as JSON is parsed as JSON.  Any other body is read as
    text and parsed as JSON if possible, otherwise treated as ``{}``.
"""

import json
from typing import Any

from fastapi import Request

from shopal.configs.system import PARSING_MODE_STRICT, ChatConfig
from shopal.core.errors import MalformedBody
from shopal.core.models import ChatRequest
from shopal.infra.http_utils import CONTENT_TYPE_HEADER, JSON_CONTENT_TYPE


def _parse_json(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise MalformedBody(f"Invalid JSON body: {exc}") from exc


def parse_body(raw: bytes, content_type: str, strict: bool) -> dict[str, Any]:
    if strict or JSON_CONTENT_TYPE in content_type.lower():
        data = _parse_json(raw)
    else:
        try:
            data = json.loads(raw.decode("utf-8", errors="replace") or "{}")
        except (ValueError, RecursionError):
            data = {}

    if isinstance(data, dict):
        return data
    if strict:
        raise MalformedBody(f"Body must be a JSON object, got {type(data).__name__}")
    return {}


def _coerce_message(value: Any, max_length: int) -> str:
    text = str(value) if value else ""
    return text[:max_length]


def _coerce_history(value: Any) -> list[Any]:
    # Entries are forwarded untouched; only a missing or non-list value
    # is replaced.
    return list(value) if isinstance(value, list) else []


def build_chat_request(
    data: dict[str, Any], config: ChatConfig
) -> ChatRequest:
    policies = data.get("policies")
    return ChatRequest(
        message=_coerce_message(data.get("message"), config.max_message_length),
        history=_coerce_history(data.get("history")),
        policies=policies if isinstance(policies, dict) else {},
    )


async def normalize_body(request: Request, config: ChatConfig) -> ChatRequest:
    raw = await request.body()
    content_type = request.headers.get(CONTENT_TYPE_HEADER, "")
    data = parse_body(raw, content_type, config.parsing_mode == PARSING_MODE_STRICT)
    return build_chat_request(data, config)
