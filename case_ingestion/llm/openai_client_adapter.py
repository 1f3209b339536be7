from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import httpx
import openai

from case_ingestion.llm.client_base import BaseLLMClient
from case_ingestion.llm.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    UpstreamError,
)
from case_ingestion.logging.logger import Log


@contextmanager
def _translated_errors() -> Iterator[None]:
    """Map SDK and transport exceptions onto the LLM error taxonomy."""
    try:
        yield
    except (openai.APITimeoutError, httpx.TimeoutException) as exc:
        raise RequestTimeoutError(f"AI provider timed out: {exc}") from exc
    except (openai.APIConnectionError, httpx.TransportError) as exc:
        raise NetworkError(f"AI provider network error: {exc}") from exc
    except openai.APIStatusError as exc:
        body = exc.response.text if exc.response is not None else str(exc.body)
        raise UpstreamError(exc.status_code, body) from exc
    except openai.APIError as exc:
        raise MalformedResponseError(f"AI provider API error: {exc}") from exc


class OpenAIClientAdapter(BaseLLMClient):
    """Inference client built on the OpenAI-compatible chat and embeddings API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._client: openai.OpenAI | None = None
        if api_key:
            self._client = openai.OpenAI(
                api_key=api_key,
                timeout=timeout_seconds,
                base_url=base_url,
                default_headers=default_headers,
                max_retries=0,
            )

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
        kwargs: dict[str, Any] = {}
        if response_format is not None:
            kwargs["response_format"] = response_format
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        Log.info(f"Calling inference endpoint with model: {model}")
        with _translated_errors():
            response = self._require_client().chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=messages,
                **kwargs,
            )
        return self._content_of(response, model)

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
        kwargs: dict[str, Any] = {}
        if timeout_seconds is not None:
            kwargs["timeout"] = timeout_seconds
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image_data_uri}},
                ],
            }
        ]
        Log.info(f"Calling vision endpoint with model: {model}")
        with _translated_errors():
            response = self._require_client().chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=messages,
                **kwargs,
            )
        return self._content_of(response, model)

    def create_embedding(
        self,
        *,
        model: str,
        text: str,
        dimensions: int | None = None,
    ) -> list[float]:
        kwargs: dict[str, Any] = {}
        if dimensions is not None:
            kwargs["dimensions"] = dimensions
        with _translated_errors():
            response = self._require_client().embeddings.create(
                model=model,
                input=text,
                **kwargs,
            )
        if not response.data:
            raise MalformedResponseError("AI returned no embedding data")
        return list(response.data[0].embedding)

    def _require_client(self) -> openai.OpenAI:
        if self._client is None:
            raise ConfigurationError("LLM_API_KEY is not configured")
        return self._client

    @staticmethod
    def _content_of(response: Any, model: str) -> str:
        usage = getattr(response, "usage", None)
        if usage is not None:
            Log.debug(
                f"Model {model} usage: prompt={usage.prompt_tokens} "
                f"completion={usage.completion_tokens}"
            )
        if not response.choices:
            raise MalformedResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise MalformedResponseError("AI returned empty response")
        return str(content)
