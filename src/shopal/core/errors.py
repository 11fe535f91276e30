"""Fatal pipeline outcomes.

Each variant carries the ``category`` / ``detail`` pair that ends up in the
500 response, so the route never has to guess which upstream broke.
"""

ERROR_SERVER = "Server error"
ERROR_COMPLETION_BACKEND = "OpenAI error"


class PipelineError(Exception):
    """Base class for faults that abort a chat request."""

    category: str = ERROR_SERVER

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class MalformedBody(PipelineError):
    """Raised when the request body cannot be read in strict mode."""


class ProductSearchError(PipelineError):
    """Raised when the storefront search call fails at the transport level.

    Covers connection errors, timeouts and non-JSON responses.  A reachable
    backend that answers with an unexpected JSON shape is *not* an error.
    """


class CompletionTransportError(PipelineError):
    """Raised when the completion backend cannot be reached."""


class CompletionBackendError(PipelineError):
    """Raised when the completion backend answers with a non-2xx status.

    ``detail`` is the raw upstream body, verbatim.
    """

    category = ERROR_COMPLETION_BACKEND

    def __init__(self, detail: str, *, status_code: int) -> None:
        super().__init__(detail)
        self.status_code = status_code
