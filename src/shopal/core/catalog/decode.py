"""Shape-checked decoding of storefront search payloads.

Every nesting level the search response must have is checked by name, and
the outcome is either ``ProductsDecoded`` or ``UnrecognizedShape`` carrying
the first level that did not match.  Callers degrade an unrecognized shape
to "no matches"; they never raise on it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from shopal.core.models import Product, UnrecognizedShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductsDecoded:
    products: list[Product] = field(default_factory=list)
    skipped: int = 0


DecodeResult = ProductsDecoded | UnrecognizedShape


def _child(value: Any, key: str, expected: type) -> Any | None:
    if not isinstance(value, dict):
        return None
    child = value.get(key)
    return child if isinstance(child, expected) else None


def _decode_node(edge: Any) -> Product | None:
    node = _child(edge, "node", dict)
    if node is None:
        return None
    title = node.get("title")
    handle = node.get("handle")
    if not isinstance(title, str) or not isinstance(handle, str):
        return None
    url = node.get("onlineStoreUrl")
    return Product(
        title=title,
        handle=handle,
        online_store_url=url if isinstance(url, str) else None,
    )


def decode_products(payload: Any) -> DecodeResult:
    """Decode ``data.products.edges[].node`` into ``Product`` objects."""
    if not isinstance(payload, dict):
        return UnrecognizedShape("payload is not an object")

    data = _child(payload, "data", dict)
    if data is None:
        return UnrecognizedShape("missing 'data'")

    products = _child(data, "products", dict)
    if products is None:
        return UnrecognizedShape("missing 'data.products'")

    edges = _child(products, "edges", list)
    if edges is None:
        return UnrecognizedShape("missing 'data.products.edges'")

    decoded: list[Product] = []
    skipped = 0
    for edge in edges:
        product = _decode_node(edge)
        if product is None:
            skipped += 1
            continue
        decoded.append(product)

    if skipped:
        logger.debug("Skipped %d malformed product edge(s)", skipped)
    return ProductsDecoded(products=decoded, skipped=skipped)
