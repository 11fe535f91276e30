"""Chat pipeline: Product Matcher -> Prompt Assembler -> Completion Invoker.

The two outbound calls run strictly in sequence because the prompt needs
the search results.  Nothing here is shared between requests.
"""

import logging
from typing import Annotated

import httpx
from fastapi import Depends

from shopal.configs.config import AppConfig, get_app_config
from shopal.infra.http_utils import get_http_client

from .catalog import ProductSearchClient
from .completion import CompletionClient
from .models import ChatRequest, ChatResponse
from .prompt import build_messages

logger = logging.getLogger(__name__)


class ChatService:
    """Answers one normalized chat request."""

    def __init__(
        self,
        config: AppConfig,
        search_client: ProductSearchClient,
        completion_client: CompletionClient,
    ) -> None:
        self._config = config
        self._search = search_client
        self._completion = completion_client

    async def respond(self, request: ChatRequest) -> ChatResponse:
        products = await self._search.search(request.message)

        messages = build_messages(
            request,
            products,
            link_style=self._config.chat.link_style,
            shop_domain=self._config.shop.domain,
        )
        completion = await self._completion.complete(messages)

        logger.info(
            "Chat answered: products=%d history=%d fallback=%s",
            len(products),
            len(request.history),
            completion.fallback,
        )
        return ChatResponse(reply=completion.reply, products=products)


def get_chat_service(
    config: Annotated[AppConfig, Depends(get_app_config)],
    http: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> ChatService:
    """Create a chat service per request from explicit dependencies."""
    return ChatService(
        config,
        ProductSearchClient(config.shop, http),
        CompletionClient(config.completion, http),
    )
