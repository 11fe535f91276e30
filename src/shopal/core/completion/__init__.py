"""Chat completion backend -- client and payload decoding."""

from .client import FALLBACK_REPLY, Completion, CompletionClient
from .decode import ReplyDecoded, decode_reply

__all__ = [
    "FALLBACK_REPLY",
    "Completion",
    "CompletionClient",
    "ReplyDecoded",
    "decode_reply",
]
