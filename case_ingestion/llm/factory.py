from typing import ClassVar

from case_ingestion.config.settings import Settings
from case_ingestion.llm.client_base import BaseLLMClient
from case_ingestion.llm.example_client_adapter import ExampleClientAdapter
from case_ingestion.llm.invoker import LLMInvoker
from case_ingestion.llm.openai_client_adapter import OpenAIClientAdapter
from case_ingestion.llm.registry import ModelRegistry


class LLMClientFactory:
    """Creates the configured inference client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseLLMClient:
        """Create a configured client from application settings."""
        provider = settings.llm_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
            default_headers=cls._resolve_headers(provider, settings),
        )

    @classmethod
    def create_invoker(
        cls,
        settings: Settings,
        registry: ModelRegistry | None = None,
    ) -> LLMInvoker:
        return LLMInvoker(cls.create(settings), registry or ModelRegistry())

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.llm_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "llm_base_url is required for llm_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        # Local ollama ignores the key but the SDK still requires one.
        if provider == "ollama":
            return settings.llm_api_key or "ollama"
        return settings.llm_api_key

    @classmethod
    def _resolve_headers(cls, provider: str, settings: Settings) -> dict[str, str] | None:
        if provider != "openrouter":
            return None
        return {
            "HTTP-Referer": settings.llm_app_referer,
            "X-Title": settings.llm_app_title,
        }
