class LLMError(Exception):
    """Base exception for remote model invocation failures."""


class ConfigurationError(LLMError):
    """Raised when no credential or endpoint is configured for the provider."""


class UpstreamError(LLMError):
    """Raised when the inference endpoint answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Inference endpoint error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


class NetworkError(LLMError):
    """Raised when the inference endpoint cannot be reached or times out."""


class MalformedResponseError(LLMError):
    """Raised when a model response cannot be used as structured output."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class RequestTimeoutError(NetworkError):
    """Raised when the per-call timeout elapses before the endpoint answers."""
