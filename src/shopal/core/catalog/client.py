"""Product Matcher: free-text search against the Storefront GraphQL API."""

from __future__ import annotations

import logging

import httpx

from shopal.configs.system import ShopConfig
from shopal.core.errors import ProductSearchError
from shopal.core.models import Product
from shopal.infra.http_utils import JSON_CONTENT_TYPE
from shopal.infra.telemetry import (
    ATTR_CATALOG_QUERY_LEN,
    ATTR_CATALOG_RESULT_COUNT,
    ATTR_CATALOG_SHAPE_RECOGNIZED,
    SPAN_CATALOG_SEARCH,
    tracer,
)

from .decode import UnrecognizedShape, decode_products

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"

SEARCH_QUERY = """#graphql
query ($q: String!, $first: Int!) {
  products(first: $first, query: $q) {
    edges { node { title handle onlineStoreUrl } }
  }
}"""


def graphql_url(config: ShopConfig) -> str:
    return f"https://{config.domain}/api/{config.api_version}/graphql.json"


class ProductSearchClient:
    """Looks up at most ``max_results`` products, in backend relevance order.

    Transport failures raise ``ProductSearchError``; a reachable backend
    that returns an unexpected shape yields ``[]``.
    """

    def __init__(self, config: ShopConfig, http: httpx.AsyncClient) -> None:
        self._config = config
        self._http = http

    def build_request(self, query_text: str) -> httpx.Request:
        """Build the outbound search request (deterministic for equal input)."""
        return self._http.build_request(
            "POST",
            graphql_url(self._config),
            headers={
                "Content-Type": JSON_CONTENT_TYPE,
                ACCESS_TOKEN_HEADER: self._config.storefront_token,
            },
            json={
                "query": SEARCH_QUERY,
                "variables": {"q": query_text, "first": self._config.max_results},
            },
            timeout=self._config.timeout,
        )

    async def search(self, query_text: str) -> list[Product]:
        """Return products matching *query_text*; no call for empty text."""
        if not query_text:
            return []

        with tracer.start_as_current_span(SPAN_CATALOG_SEARCH) as span:
            span.set_attribute(ATTR_CATALOG_QUERY_LEN, len(query_text))
            logger.debug("Product search: query_len=%d", len(query_text))

            try:
                response = await self._http.send(self.build_request(query_text))
                payload = response.json()
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
                raise ProductSearchError(str(exc) or type(exc).__name__) from exc

            result = decode_products(payload)
            if isinstance(result, UnrecognizedShape):
                span.set_attribute(ATTR_CATALOG_SHAPE_RECOGNIZED, False)
                span.set_attribute(ATTR_CATALOG_RESULT_COUNT, 0)
                logger.warning(
                    "Unrecognized search payload (status=%d): %s",
                    response.status_code,
                    result.reason,
                )
                return []

            products = result.products[: self._config.max_results]
            span.set_attribute(ATTR_CATALOG_SHAPE_RECOGNIZED, True)
            span.set_attribute(ATTR_CATALOG_RESULT_COUNT, len(products))
            return products
