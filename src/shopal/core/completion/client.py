"""Completion Invoker: one chat completion call, no retries."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx
import openai

from shopal.configs.system import CompletionConfig
from shopal.core.errors import CompletionBackendError, CompletionTransportError
from shopal.core.models import ChatMessage
from shopal.infra.telemetry import (
    ATTR_COMPLETION_FALLBACK,
    ATTR_COMPLETION_MESSAGE_COUNT,
    ATTR_COMPLETION_MODEL,
    ATTR_COMPLETION_STATUS_CODE,
    SPAN_COMPLETION_INVOKE,
    tracer,
)

from .decode import ReplyDecoded, decode_reply

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I could not generate a reply."

# The SDK refuses an empty key; the backend answers the placeholder with 401.
_PLACEHOLDER_API_KEY = "unused"


@dataclass(frozen=True)
class Completion:
    reply: str
    fallback: bool = False


class CompletionClient:
    """OpenAI-compatible chat completion client.

    Non-2xx answers raise ``CompletionBackendError`` with the raw body;
    an answer without usable content degrades to ``FALLBACK_REPLY``.
    """

    def __init__(self, config: CompletionConfig, http: httpx.AsyncClient) -> None:
        self._config = config
        self._openai = openai.AsyncOpenAI(
            base_url=config.base_url,
            api_key=config.api_key or _PLACEHOLDER_API_KEY,
            http_client=http,
            max_retries=0,
            timeout=config.timeout,
        )

    def build_payload(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": list(messages),
            "temperature": self._config.temperature,
        }

    async def complete(self, messages: Sequence[ChatMessage]) -> Completion:
        payload = self.build_payload(messages)

        with tracer.start_as_current_span(SPAN_COMPLETION_INVOKE) as span:
            span.set_attribute(ATTR_COMPLETION_MODEL, self._config.model)
            span.set_attribute(ATTR_COMPLETION_MESSAGE_COUNT, len(messages))

            try:
                raw = await self._openai.chat.completions.with_raw_response.create(
                    **payload
                )
            except openai.APIStatusError as exc:
                span.set_attribute(ATTR_COMPLETION_STATUS_CODE, exc.status_code)
                logger.warning(
                    "Completion backend rejected the call: status=%d",
                    exc.status_code,
                )
                raise CompletionBackendError(
                    exc.response.text, status_code=exc.status_code
                ) from exc
            except openai.APIConnectionError as exc:
                raise CompletionTransportError(str(exc)) from exc

            response = raw.http_response
            span.set_attribute(ATTR_COMPLETION_STATUS_CODE, response.status_code)

            result = decode_reply(response.json())
            if isinstance(result, ReplyDecoded):
                span.set_attribute(ATTR_COMPLETION_FALLBACK, False)
                return Completion(reply=result.content)

            span.set_attribute(ATTR_COMPLETION_FALLBACK, True)
            logger.warning("Completion without usable content: %s", result.reason)
            return Completion(reply=FALLBACK_REPLY, fallback=True)
