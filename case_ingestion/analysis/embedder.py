from case_ingestion.analysis.outcome import StageOutcome
from case_ingestion.llm.exceptions import LLMError
from case_ingestion.llm.invoker import LLMInvoker
from case_ingestion.llm.registry import Stage
from case_ingestion.logging.logger import Log


class DocumentEmbedder:
    """Embeds anonymized text with the model resolved for the embeddings stage.

    Vectors whose length differs from the resolved tier's dimensions are
    rejected, so one deployment never mixes dimensionalities.
    """

    def __init__(self, invoker: LLMInvoker, *, max_input_chars: int = 30_000) -> None:
        self._invoker = invoker
        self._max_input_chars = max_input_chars

    def embed(self, text: str) -> StageOutcome[list[float]]:
        expected = self._invoker.registry.resolve(Stage.EMBEDDINGS).dimensions
        try:
            vector = self._invoker.embed(text[: self._max_input_chars])
        except LLMError as exc:
            Log.warning(f"Embedding generation failed: {exc}")
            return StageOutcome.absent(f"{type(exc).__name__}: {exc}")

        if not vector:
            return StageOutcome.absent("EmptyEmbedding: provider returned no values")
        if expected is not None and len(vector) != expected:
            Log.warning(f"Embedding has {len(vector)} dimensions, expected {expected}")
            return StageOutcome.absent(
                f"DimensionMismatch: got {len(vector)}, expected {expected}"
            )

        Log.info(f"Embedding generated: {len(vector)} dimensions")
        return StageOutcome.ok(vector)
