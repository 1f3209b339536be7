"""Deep per-document analysis through the document_extraction stage model."""

import json
from pathlib import Path

from case_ingestion.analysis.outcome import StageOutcome
from case_ingestion.analysis.prompt_loader import load_prompt
from case_ingestion.llm.exceptions import LLMError, MalformedResponseError
from case_ingestion.llm.invoker import LLMInvoker
from case_ingestion.llm.registry import Stage
from case_ingestion.logging.logger import Log


class DocumentAnalyzer:
    """Asks the extraction model for a structured reading of one document.

    Never raises for remote-model problems: every failure becomes an absent
    StageOutcome whose reason names the error type.
    """

    def __init__(
        self,
        invoker: LLMInvoker,
        *,
        max_tokens: int = 2000,
        temperature: float | None = None,
        max_input_chars: int = 150_000,
        prompt_dir: Path | None = None,
    ) -> None:
        self._invoker = invoker
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._max_input_chars = max_input_chars
        schema = load_prompt("document_analysis_schema.json", prompt_dir)
        self._json_schema: dict[str, object] = json.loads(schema)
        self._system_prompt = load_prompt("document_analysis_system.txt", prompt_dir).format(
            json_schema=schema.strip()
        )
        self._user_template = load_prompt("document_analysis_user.txt", prompt_dir)

    def analyze(self, text: str, document_type: str) -> StageOutcome[dict[str, object]]:
        if len(text) > self._max_input_chars:
            Log.warning(
                f"Truncating {len(text)} chars to {self._max_input_chars} for analysis"
            )
            text = text[: self._max_input_chars]

        user_prompt = self._user_template.format(
            document_type=document_type,
            document_text=text,
        )
        Log.debug(f"Document analysis prompt:\n{user_prompt}")
        try:
            analysis = self._invoker.invoke_json(
                Stage.DOCUMENT_EXTRACTION,
                self._system_prompt,
                user_prompt,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                json_schema=self._json_schema,
            )
        except MalformedResponseError as exc:
            Log.warning(
                f"Document analysis returned unusable output: {exc}; "
                f"preview: {exc.raw_text[:500]!r}"
            )
            return StageOutcome.absent(f"{type(exc).__name__}: {exc}")
        except LLMError as exc:
            Log.warning(f"Document analysis failed: {exc}")
            return StageOutcome.absent(f"{type(exc).__name__}: {exc}")

        Log.info(f"Document analysis complete: {len(analysis)} top-level fields")
        return StageOutcome.ok(analysis)
