from abc import ABC, abstractmethod


class BaseLLMClient(ABC):
    """Contract for provider-specific inference clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
        response_format: dict[str, object] | None = None,
    ) -> str:
        """Return the model's reply as plain text."""

    @abstractmethod
    def create_vision_completion(
        self,
        *,
        model: str,
        prompt: str,
        image_data_uri: str,
        temperature: float,
        max_tokens: int,
        timeout_seconds: float | None = None,
    ) -> str:
        """Return the model's reply to a prompt about an inline image."""

    @abstractmethod
    def create_embedding(
        self,
        *,
        model: str,
        text: str,
        dimensions: int | None = None,
    ) -> list[float]:
        """Return the embedding vector for *text*."""
