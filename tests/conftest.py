"""Shared fixtures: fake storefront / completion backends and the test app."""

from __future__ import annotations

import json
from typing import Any, Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from shopal.app import get_app
from shopal.configs.config import AppConfig, get_app_config
from shopal.configs.system import (
    ChatConfig,
    CompletionConfig,
    LoggingConfig,
    ShopConfig,
    TracingConfig,
)
from shopal.infra.http_utils import get_http_client

SHOP_DOMAIN = "test-shop.myshopify.com"
SHOP_TOKEN = "storefront-token"
API_KEY = "sk-test"
SEARCH_URL = f"https://{SHOP_DOMAIN}/api/2024-07/graphql.json"
COMPLETION_URL = "https://api.openai.com/v1/chat/completions"


def search_payload(*nodes: dict[str, Any]) -> dict[str, Any]:
    return {"data": {"products": {"edges": [{"node": n} for n in nodes]}}}


def completion_payload(content: Any) -> dict[str, Any]:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1234567890,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackends:
    """``httpx.MockTransport`` handler standing in for both upstreams."""

    def __init__(self) -> None:
        self.search: Handler = lambda request: httpx.Response(
            200, json=search_payload()
        )
        self.completion: Handler = lambda request: httpx.Response(
            200, json=completion_payload("Hello!")
        )
        self.search_requests: list[httpx.Request] = []
        self.completion_requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/graphql.json"):
            self.search_requests.append(request)
            return self.search(request)
        if request.url.path.endswith("/chat/completions"):
            self.completion_requests.append(request)
            return self.completion(request)
        return httpx.Response(404, text="unexpected upstream call")

    def completion_body(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.completion_requests[index].content)

    def search_body(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.search_requests[index].content)


def make_config(**chat: Any) -> AppConfig:
    return AppConfig(
        shop=ShopConfig(domain=SHOP_DOMAIN, storefront_token=SHOP_TOKEN),
        completion=CompletionConfig(api_key=API_KEY),
        chat=ChatConfig(**chat),
        logging=LoggingConfig(json_output=False),
        tracing=TracingConfig(enabled=False),
    )


@pytest.fixture
def backends() -> FakeBackends:
    return FakeBackends()


@pytest.fixture
def config() -> AppConfig:
    return make_config()


@pytest.fixture
def client(config: AppConfig, backends: FakeBackends) -> Generator[TestClient, None, None]:
    app = get_app(config)

    async def _http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(backends)) as c:
            yield c

    app.dependency_overrides[get_app_config] = lambda: config
    app.dependency_overrides[get_http_client] = _http_client

    with TestClient(app) as test_client:
        yield test_client
