"""Offline inference client.

Use this module as a reference when implementing new provider adapters.
Implement BaseLLMClient and register the provider in LLMClientFactory.
"""

import hashlib
import json
from typing import ClassVar

from case_ingestion.llm.client_base import BaseLLMClient


class ExampleClientAdapter(BaseLLMClient):
    """Adapter returning fixed, valid responses without network calls.

    Useful for local development and tests: the document-analysis JSON is
    always well formed and embeddings are stable for identical input.
    """

    DEFAULT_ANALYSIS: ClassVar[dict[str, object]] = {
        "summary": "",
        "dates": [],
        "amounts": [],
        "references": [],
        "events": [],
        "hmrc_failures": [],
        "key_quotes": [],
    }
    DEFAULT_DIMENSIONS: ClassVar[int] = 8

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
        _ = model, system_prompt, user_prompt, temperature, max_tokens, response_format
        return json.dumps(self.DEFAULT_ANALYSIS)

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
        _ = model, prompt, temperature, max_tokens, timeout_seconds
        return f"[example transcription of {len(image_data_uri)} byte image payload]"

    def create_embedding(
        self,
        *,
        model: str,
        text: str,
        dimensions: int | None = None,
    ) -> list[float]:
        _ = model
        size = dimensions or self.DEFAULT_DIMENSIONS
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [digest[i % len(digest)] / 255.0 for i in range(size)]
