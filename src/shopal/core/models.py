"""Request-scoped domain models."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

# Shape of a history entry ({"role": ..., "content": ...}).  Caller history
# is forwarded to the completion backend untouched and never checked
# against it.
ChatMessage = dict[str, Any]


class ChatRequest(BaseModel):
    """Normalized inbound chat request."""

    message: str = Field(default="", description="Customer message, truncated")
    history: list[Any] = Field(
        default_factory=list,
        description="Previous conversation messages, oldest first",
    )
    policies: dict[str, Any] = Field(
        default_factory=dict,
        description="Store policy texts keyed by shipping/returns/regions/contact",
    )


class Product(BaseModel):
    """Catalog match, serialized with the storefront's own field names."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    handle: str = Field(description="URL-path slug of the product")
    online_store_url: str | None = Field(default=None, alias="onlineStoreUrl")


class ChatResponse(BaseModel):
    """Successful chat reply."""

    reply: str
    products: list[Product] = Field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class UnrecognizedShape:
    """Decode outcome for an upstream payload that lacks an expected level."""

    reason: str
