"""Per-request outbound HTTP client.

Pure infra -- no domain imports.  Both outbound calls of a request (search,
then completion) share one ``httpx.AsyncClient`` that is closed when the
response is sent.  Tests override ``get_http_client`` with a client built on
``httpx.MockTransport``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx

JSON_CONTENT_TYPE = "application/json"
CONTENT_TYPE_HEADER = "content-type"


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """FastAPI dependency -- yields a client owned by the current request.

    Timeouts are applied per call by the search and completion clients.
    """
    async with httpx.AsyncClient() as client:
        yield client
