"""Shape-checked decoding of chat completion payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from shopal.core.models import UnrecognizedShape


@dataclass(frozen=True)
class ReplyDecoded:
    content: str


ReplyResult = ReplyDecoded | UnrecognizedShape


def decode_reply(payload: Any) -> ReplyResult:
    """Pick ``choices[0].message.content``; it must be a non-empty string."""
    if not isinstance(payload, dict):
        return UnrecognizedShape("payload is not an object")

    choices = payload.get("choices")
    if not isinstance(choices, list):
        return UnrecognizedShape("missing 'choices'")
    if not choices:
        return UnrecognizedShape("empty 'choices'")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        return UnrecognizedShape("missing 'choices[0].message'")

    content = message.get("content")
    if not isinstance(content, str) or not content:
        return UnrecognizedShape("missing 'choices[0].message.content'")

    return ReplyDecoded(content=content)
