"""Stage-aware entry point for every remote model call."""

from case_ingestion.llm.client_base import BaseLLMClient
from case_ingestion.llm.registry import ModelRegistry, ModelTier, Stage
from case_ingestion.llm.structured import parse_json_response
from case_ingestion.logging.logger import Log

_CHARS_PER_TOKEN = 4


def approximate_tokens(text: str) -> int:
    return max(1, len(text) // _CHARS_PER_TOKEN)


class LLMInvoker:
    """Sends requests through a provider client using registry-resolved models."""

    def __init__(self, client: BaseLLMClient, registry: ModelRegistry) -> None:
        self._client = client
        self._registry = registry

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    def invoke(
        self,
        model_id: str,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        response_format: dict[str, object] | None = None,
    ) -> str:
        """Return the raw text reply of *model_id*.

        Raises:
            ConfigurationError: no credential configured.
            UpstreamError: endpoint answered with a non-success status.
            NetworkError: transport failure or timeout.
        """
        return self._client.create_chat_completion(
            model=model_id,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format=response_format,
        )

    def invoke_stage(
        self,
        stage: Stage,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float | None = None,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        tier = self._registry.resolve(stage)
        response_format = None
        if json_schema is not None and tier.supports_strict_json:
            response_format = self._registry.structured_output_config(
                json_schema, name=f"{stage.value}_result"
            )
        reply = self.invoke(
            tier.model,
            system_prompt,
            user_prompt,
            temperature=self._temperature_for(tier, temperature),
            max_tokens=max_tokens,
            response_format=response_format,
        )
        self._log_cost(stage, tier, system_prompt + user_prompt, reply)
        return reply

    def invoke_json(
        self,
        stage: Stage,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float | None = None,
        json_schema: dict[str, object] | None = None,
    ) -> dict[str, object]:
        """Invoke *stage* and parse its reply as a JSON object.

        When the resolved tier supports strict JSON and *json_schema* is given,
        the schema is sent as the response_format.

        Raises:
            MalformedResponseError: reply is not a (possibly fenced) JSON object.
        """
        reply = self.invoke_stage(
            stage,
            system_prompt,
            user_prompt,
            max_tokens=max_tokens,
            temperature=temperature,
            json_schema=json_schema,
        )
        Log.debug(f"{stage.value} raw response:\n{reply}")
        return parse_json_response(reply)

    def transcribe_image(
        self,
        prompt: str,
        image_data_uri: str,
        temperature: float,
        max_tokens: int,
        timeout_seconds: float | None = None,
    ) -> str:
        tier = self._registry.resolve(Stage.OCR)
        reply = self._client.create_vision_completion(
            model=tier.model,
            prompt=prompt,
            image_data_uri=image_data_uri,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout_seconds=timeout_seconds,
        )
        self._log_cost(Stage.OCR, tier, prompt, reply)
        return reply

    def embed(self, text: str) -> list[float]:
        tier = self._registry.resolve(Stage.EMBEDDINGS)
        vector = self._client.create_embedding(
            model=tier.model,
            text=text,
            dimensions=tier.dimensions,
        )
        self._log_cost(Stage.EMBEDDINGS, tier, text, "")
        return vector

    @staticmethod
    def _temperature_for(tier: ModelTier, requested: float | None) -> float:
        if requested is not None:
            return requested
        return tier.temperature if tier.temperature is not None else 0.7

    def _log_cost(self, stage: Stage, tier: ModelTier, prompt: str, reply: str) -> None:
        cost = self._registry.estimate_cost(
            stage,
            approximate_tokens(prompt),
            approximate_tokens(reply) if reply else 0,
        )
        Log.info(f"{stage.value} via {tier.model} ({tier.key}): est. ${cost:.6f}")
