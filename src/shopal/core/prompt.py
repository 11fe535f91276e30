"""Prompt assembly: persona, store policies and product matches.

The outbound message list is always::

    [system] + history (verbatim, in order) + [user]

where the user turn is the truncated customer message followed by the
rendered product-match block.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from shopal.configs.system import LINK_STYLE_ABSOLUTE_URL, LinkStyle
from shopal.core.models import ROLE_SYSTEM, ROLE_USER, ChatRequest, Product

PERSONA_BASE = """You are a helpful Shopify sales assistant named Shopal.
- Be concise and friendly."""

PERSONA_LINK_RULE_RELATIVE = (
    "- When referencing products, ONLY use Markdown links like "
    "[Title](/products/{handle}). Never show raw URLs."
)

PERSONA_LINK_RULE_ABSOLUTE = (
    "- When referencing products, include the product link listed with it."
)

PERSONA_RULES = """- Use only the store policies provided.
- For order-specific issues, offer human handoff."""

POLICIES_HEADER = "\nPolicies:\n"
PRODUCTS_HEADER = "Matched products:"
NO_PRODUCT_MATCHES = "No product matches."
BULLET = "•"

# (policy key, label, default text) in render order
POLICY_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("shipping", "Shipping", "3–7 business days in Canada; selected USA items."),
    ("returns", "Returns", "30 days from delivery; unused/undamaged."),
    ("regions", "Regions", "Canada + limited USA items."),
    ("contact", "Contact", "Live agent 9am–6pm ET."),
)


def persona_text(link_style: LinkStyle) -> str:
    link_rule = (
        PERSONA_LINK_RULE_ABSOLUTE
        if link_style == LINK_STYLE_ABSOLUTE_URL
        else PERSONA_LINK_RULE_RELATIVE
    )
    return "\n".join((PERSONA_BASE, link_rule, PERSONA_RULES))


def render_policies(policies: Mapping[str, Any]) -> str:
    """One ``Label: value`` line per policy, defaults for missing/empty ones."""
    lines = []
    for key, label, default in POLICY_FIELDS:
        value = policies.get(key)
        lines.append(f"{label}: {value if value else default}")
    return "\n".join(lines)


def product_path(product: Product) -> str:
    return f"/products/{product.handle}"


def product_url(product: Product, shop_domain: str = "") -> str:
    """Storefront URL, rebuilt from the handle when the backend omitted it."""
    if product.online_store_url:
        return product.online_store_url
    if shop_domain:
        return f"https://{shop_domain}{product_path(product)}"
    return product_path(product)


def render_products(
    products: Sequence[Product],
    link_style: LinkStyle,
    shop_domain: str = "",
) -> str:
    if not products:
        return NO_PRODUCT_MATCHES

    if link_style == LINK_STYLE_ABSOLUTE_URL:
        lines = [f"{BULLET} {p.title}: {product_url(p, shop_domain)}" for p in products]
    else:
        lines = [f"{BULLET} [{p.title}]({product_path(p)})" for p in products]
    return PRODUCTS_HEADER + "\n" + "\n".join(lines)


def build_system_message(policies: Mapping[str, Any], link_style: LinkStyle) -> str:
    return persona_text(link_style) + POLICIES_HEADER + render_policies(policies)


def build_messages(
    request: ChatRequest,
    products: Sequence[Product],
    link_style: LinkStyle,
    shop_domain: str = "",
) -> list[Any]:
    """Assemble the exact message list sent to the completion backend."""
    product_block = render_products(products, link_style, shop_domain)
    return [
        {
            "role": ROLE_SYSTEM,
            "content": build_system_message(request.policies, link_style),
        },
        *request.history,
        {"role": ROLE_USER, "content": f"{request.message}\n\n{product_block}"},
    ]
