from typing import Literal

from pydantic import BaseModel, Field

PARSING_MODE_STRICT = "strict"
PARSING_MODE_LENIENT = "lenient"
LINK_STYLE_ABSOLUTE_URL = "absolute_url"
LINK_STYLE_RELATIVE_MARKDOWN = "relative_markdown"

ParsingMode = Literal["strict", "lenient"]
LinkStyle = Literal["absolute_url", "relative_markdown"]


class ShopConfig(BaseModel):
    """Storefront search backend settings."""

    domain: str = Field(
        default="", description="Store domain, e.g. my-store.myshopify.com"
    )
    storefront_token: str = Field(
        default="", description="Storefront API access token"
    )
    api_version: str = Field(
        default="2024-07", description="Storefront GraphQL API version"
    )
    max_results: int = Field(
        default=5, ge=1, le=5, description="Maximum number of products per search"
    )
    timeout: float = Field(
        default=30.0, gt=0, description="Search request timeout in seconds"
    )


class CompletionConfig(BaseModel):
    """OpenAI-compatible chat completion backend settings."""

    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL; requests go to {base_url}/chat/completions",
    )
    api_key: str = Field(default="", description="Bearer API key")
    model: str = Field(default="gpt-4o-mini", description="Model identifier")
    temperature: float = Field(
        default=0.3, description="Sampling temperature for model responses"
    )
    timeout: float = Field(
        default=60.0, gt=0, description="Completion request timeout in seconds"
    )


class ChatConfig(BaseModel):
    """Configuration for request handling and prompt rendering."""

    parsing_mode: ParsingMode = Field(
        default=PARSING_MODE_LENIENT,
        description="strict: body must be JSON; lenient: tolerate bad bodies",
    )
    link_style: LinkStyle = Field(
        default=LINK_STYLE_RELATIVE_MARKDOWN,
        description="How matched products are linked in the prompt",
    )
    max_message_length: int = Field(
        default=2000, ge=0, description="Customer message is cut to this length"
    )


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True, description="Emit JSON lines instead of coloured text"
    )


class TracingConfig(BaseModel):
    """OpenTelemetry export settings."""

    enabled: bool = Field(default=False, description="Enable OTLP tracing")
    endpoint: str = Field(default="", description="OTLP HTTP traces endpoint")
    username: str = Field(default="", description="Basic auth username")
    password: str = Field(default="", description="Basic auth password")
    service_name: str = Field(default="shopal", description="service.name")
    sample_rate: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Root span sampling ratio"
    )
