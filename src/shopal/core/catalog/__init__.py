"""Storefront product search -- client and payload decoding."""

from .client import ProductSearchClient
from .decode import ProductsDecoded, UnrecognizedShape, decode_products

__all__ = [
    "ProductSearchClient",
    "ProductsDecoded",
    "UnrecognizedShape",
    "decode_products",
]
