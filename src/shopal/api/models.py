"""Pydantic models for the HTTP surface."""

from pydantic import BaseModel, Field


class ErrorPayload(BaseModel):
    """Body of every 500 response."""

    error: str = Field(description="Error category, e.g. 'Server error'")
    detail: str = Field(description="Diagnostic text, may be raw upstream output")
