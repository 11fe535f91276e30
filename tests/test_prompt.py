"""Tests for prompt assembly."""

from shopal.core.models import ChatRequest, Product
from shopal.core.prompt import (
    NO_PRODUCT_MATCHES,
    build_messages,
    build_system_message,
    persona_text,
    render_policies,
    render_products,
)

SHIRT = Product(title="Blue Shirt", handle="blue-shirt")
HAT = Product(
    title="Sun Hat",
    handle="sun-hat",
    online_store_url="https://shop.example/products/sun-hat",
)

DEFAULT_POLICIES = (
    "Shipping: 3–7 business days in Canada; selected USA items.\n"
    "Returns: 30 days from delivery; unused/undamaged.\n"
    "Regions: Canada + limited USA items.\n"
    "Contact: Live agent 9am–6pm ET."
)


class TestRenderPolicies:
    def test_all_defaults(self):
        assert render_policies({}) == DEFAULT_POLICIES

    def test_fixed_order_with_overrides(self):
        text = render_policies(
            {"contact": "Email us.", "shipping": "Next day.", "unknown": "ignored"}
        )
        assert text.splitlines() == [
            "Shipping: Next day.",
            "Returns: 30 days from delivery; unused/undamaged.",
            "Regions: Canada + limited USA items.",
            "Contact: Email us.",
        ]

    def test_empty_value_uses_default(self):
        assert render_policies({"returns": ""}) == DEFAULT_POLICIES


class TestRenderProducts:
    def test_no_matches(self):
        assert render_products([], "relative_markdown") == NO_PRODUCT_MATCHES
        assert render_products([], "absolute_url") == NO_PRODUCT_MATCHES

    def test_relative_markdown_links(self):
        assert render_products([SHIRT, HAT], "relative_markdown") == (
            "Matched products:\n"
            "• [Blue Shirt](/products/blue-shirt)\n"
            "• [Sun Hat](/products/sun-hat)"
        )

    def test_absolute_urls(self):
        assert render_products([SHIRT, HAT], "absolute_url", "shop.example") == (
            "Matched products:\n"
            "• Blue Shirt: https://shop.example/products/blue-shirt\n"
            "• Sun Hat: https://shop.example/products/sun-hat"
        )

    def test_absolute_url_without_domain_falls_back_to_path(self):
        assert render_products([SHIRT], "absolute_url").endswith(
            "• Blue Shirt: /products/blue-shirt"
        )


class TestSystemMessage:
    def test_relative_persona_forbids_raw_urls(self):
        persona = persona_text("relative_markdown")
        assert persona.startswith("You are a helpful Shopify sales assistant named Shopal.")
        assert "Never show raw URLs." in persona
        assert "- For order-specific issues, offer human handoff." in persona

    def test_absolute_persona_allows_links(self):
        assert "Never show raw URLs." not in persona_text("absolute_url")

    def test_layout(self):
        system = build_system_message({}, "relative_markdown")
        assert system == persona_text("relative_markdown") + "\nPolicies:\n" + DEFAULT_POLICIES


class TestBuildMessages:
    def test_message_order(self):
        history = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]
        request = ChatRequest(message="shirts?", history=history)

        messages = build_messages(request, [SHIRT], "relative_markdown")

        assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
        assert messages[1:3] == history
        assert messages[-1]["content"] == (
            "shirts?\n\nMatched products:\n• [Blue Shirt](/products/blue-shirt)"
        )

    def test_history_not_mutated(self):
        history = [{"role": "user", "content": "hi", "name": "carol"}]
        request = ChatRequest(message="x", history=history)

        messages = build_messages(request, [], "relative_markdown")

        assert request.history == [{"role": "user", "content": "hi", "name": "carol"}]
        assert len(request.history) == 1
        assert messages[1] == history[0]

    def test_empty_message(self):
        messages = build_messages(ChatRequest(), [], "relative_markdown")
        assert messages[-1] == {"role": "user", "content": "\n\nNo product matches."}
