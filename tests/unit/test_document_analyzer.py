from unittest.mock import MagicMock

import pytest

from case_ingestion.analysis.document_analyzer import DocumentAnalyzer
from case_ingestion.analysis.embedder import DocumentEmbedder
from case_ingestion.analysis.outcome import StageOutcome
from case_ingestion.llm.client_base import BaseLLMClient
from case_ingestion.llm.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    NetworkError,
    UpstreamError,
)
from case_ingestion.llm.invoker import LLMInvoker
from case_ingestion.llm.registry import ModelRegistry, Stage


def _make_invoker(**environ: str) -> tuple[LLMInvoker, MagicMock]:
    client = MagicMock(spec=BaseLLMClient)
    return LLMInvoker(client, ModelRegistry(environ=environ)), client


class TestStageOutcome:
    def test_ok_is_present(self) -> None:
        outcome = StageOutcome.ok([1.0])
        assert outcome.present
        assert outcome.absent_reason is None

    def test_absent_carries_reason(self) -> None:
        outcome: StageOutcome[list[float]] = StageOutcome.absent("UpstreamError: 500")
        assert not outcome.present
        assert outcome.value is None

    def test_requires_exactly_one_side(self) -> None:
        with pytest.raises(ValueError):
            StageOutcome()
        with pytest.raises(ValueError):
            StageOutcome(value=1, absent_reason="x")


class TestDocumentAnalyzer:
    def test_returns_parsed_analysis(self) -> None:
        invoker, client = _make_invoker()
        client.create_chat_completion.return_value = (
            '```json\n{"summary": "Delay", "references": ["BT/2024/12345"]}\n```'
        )

        outcome = DocumentAnalyzer(invoker).analyze("Letter text", "hmrc_letter")

        assert outcome.present
        assert outcome.value == {"summary": "Delay", "references": ["BT/2024/12345"]}

    def test_prompts_carry_schema_type_and_text(self) -> None:
        invoker, client = _make_invoker()
        client.create_chat_completion.return_value = "{}"

        DocumentAnalyzer(invoker).analyze("Letter text about SEIS3", "evidence")

        kwargs = client.create_chat_completion.call_args.kwargs
        assert '"hmrc_failures"' in kwargs["system_prompt"]
        assert "Document type: evidence" in kwargs["user_prompt"]
        assert "Letter text about SEIS3" in kwargs["user_prompt"]
        assert kwargs["model"] == "anthropic/claude-haiku-4.5"

    def test_truncates_long_input(self) -> None:
        invoker, client = _make_invoker()
        client.create_chat_completion.return_value = "{}"

        DocumentAnalyzer(invoker, max_input_chars=10).analyze("x" * 50 + "TAIL", "evidence")

        user_prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "x" * 10 in user_prompt
        assert "x" * 11 not in user_prompt
        assert "TAIL" not in user_prompt

    def test_sends_schema_to_strict_json_tier(self) -> None:
        invoker, client = _make_invoker(MODEL_DOCUMENT_EXTRACTION="strictJson")
        client.create_chat_completion.return_value = "{}"

        DocumentAnalyzer(invoker).analyze("text", "evidence")

        response_format = client.create_chat_completion.call_args.kwargs["response_format"]
        assert response_format["json_schema"]["schema"]["required"][0] == "summary"

    @pytest.mark.parametrize(
        "error",
        [
            UpstreamError(500, "boom"),
            NetworkError("down"),
            ConfigurationError("LLM_API_KEY is not configured"),
        ],
    )
    def test_model_errors_become_absent(self, error: Exception) -> None:
        invoker, client = _make_invoker()
        client.create_chat_completion.side_effect = error

        outcome = DocumentAnalyzer(invoker).analyze("text", "evidence")

        assert not outcome.present
        assert outcome.absent_reason is not None
        assert outcome.absent_reason.startswith(type(error).__name__)

    def test_malformed_reply_becomes_absent(self) -> None:
        invoker, client = _make_invoker()
        client.create_chat_completion.return_value = "not json"

        outcome = DocumentAnalyzer(invoker).analyze("text", "evidence")

        assert outcome.absent_reason is not None
        assert outcome.absent_reason.startswith(MalformedResponseError.__name__)


class TestDocumentEmbedder:
    def test_returns_vector_of_tier_dimensions(self) -> None:
        invoker, client = _make_invoker()
        client.create_embedding.return_value = [0.5] * 3072

        outcome = DocumentEmbedder(invoker).embed("text")

        assert outcome.present
        assert len(outcome.value or []) == 3072

    def test_dimension_mismatch_is_absent(self) -> None:
        invoker, client = _make_invoker()
        client.create_embedding.return_value = [0.5] * 10

        outcome = DocumentEmbedder(invoker).embed("text")

        assert outcome.absent_reason == "DimensionMismatch: got 10, expected 3072"

    def test_empty_vector_is_absent(self) -> None:
        invoker, client = _make_invoker()
        client.create_embedding.return_value = []

        assert not DocumentEmbedder(invoker).embed("text").present

    def test_upstream_error_is_absent(self) -> None:
        invoker, client = _make_invoker()
        client.create_embedding.side_effect = UpstreamError(500, "Internal Server Error")

        outcome = DocumentEmbedder(invoker).embed("text")

        assert outcome.absent_reason == (
            "UpstreamError: Inference endpoint error: 500 - Internal Server Error"
        )

    def test_truncates_input(self) -> None:
        invoker, client = _make_invoker()
        client.create_embedding.return_value = [0.0] * 3072

        DocumentEmbedder(invoker, max_input_chars=5).embed("abcdefghij")

        assert client.create_embedding.call_args.kwargs["text"] == "abcde"

    def test_uses_override_tier(self) -> None:
        invoker, client = _make_invoker(MODEL_EMBEDDINGS="costEfficient")
        client.create_embedding.return_value = [0.0] * 1536

        outcome = DocumentEmbedder(invoker).embed("text")

        assert outcome.present
        assert invoker.registry.resolve(Stage.EMBEDDINGS).key == "costEfficient"
