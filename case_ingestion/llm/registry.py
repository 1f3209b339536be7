"""Stage -> model tier catalogue with live environment overrides.

Each pipeline stage owns an ordered set of named tiers. Exactly one tier per
stage is marked primary. ``MODEL_<STAGE>`` in the environment may name another
tier of the same stage (``MODEL_DOCUMENT_EXTRACTION=costEfficient``). The
underscore-free spelling used by older deployments (``MODEL_DOCUMENTEXTRACTION``)
is honoured too when the snake-case variable is unset. The override is read on
every ``resolve`` call so it takes effect without a restart. Unknown overrides
fall back to primary.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from case_ingestion.logging.logger import Log


class Stage(str, Enum):
    """Pipeline stages that call a remote model."""

    EMBEDDINGS = "embeddings"
    DOCUMENT_EXTRACTION = "document_extraction"
    OCR = "ocr"
    RERANKING = "reranking"
    COMPLAINT_ANALYSIS = "complaint_analysis"
    LETTER_FACTS = "letter_facts"
    LETTER_STRUCTURE = "letter_structure"
    LETTER_TONE = "letter_tone"

    @property
    def override_variable(self) -> str:
        return f"MODEL_{self.value.upper()}"

    @property
    def compact_override_variable(self) -> str:
        """Underscore-free spelling, e.g. MODEL_DOCUMENTEXTRACTION; still honoured."""
        return f"MODEL_{self.value.replace('_', '').upper()}"


@dataclass(frozen=True)
class ModelTier:
    """Static metadata for one model option of a stage.

    cost_per_1m_in / cost_per_1m_out: USD per million chat tokens.
    cost_per_1m: flat USD per million input tokens (embedding-only tiers).
    cost_per_1k_searches: reranker pricing, not token based.
    """

    key: str
    model: str
    provider: str = "openrouter"
    context_window: int | None = None
    dimensions: int | None = None
    temperature: float | None = None
    cost_per_1m_in: float | None = None
    cost_per_1m_out: float | None = None
    cost_per_1m: float | None = None
    cost_per_1k_searches: float | None = None
    supports_strict_json: bool = False
    supports_vision: bool = False
    primary: bool = False
    notes: str = ""


_HAIKU = "anthropic/claude-haiku-4.5"
_SONNET = "anthropic/claude-sonnet-4.5"
_GPT4O = "openai/gpt-4o"
_GPT4O_MINI = "openai/gpt-4o-mini"
_GEMINI = "google/gemini-pro-1.5"

DEFAULT_TIERS: Mapping[Stage, tuple[ModelTier, ...]] = MappingProxyType({
    Stage.EMBEDDINGS: (
        ModelTier(
            key="primary",
            model="openai/text-embedding-3-large",
            dimensions=3072,
            cost_per_1m=0.13,
            primary=True,
            notes="Best retrieval performance",
        ),
        ModelTier(
            key="costEfficient",
            model="openai/text-embedding-3-small",
            dimensions=1536,
            cost_per_1m=0.02,
            notes="Cheaper, pair with a reranker",
        ),
        ModelTier(
            key="domainSpecific",
            model="voyage-law-2",
            provider="voyage",
            dimensions=1024,
            cost_per_1m=0.12,
            notes="Legal-tuned retrieval, requires a Voyage key",
        ),
    ),
    Stage.DOCUMENT_EXTRACTION: (
        ModelTier(
            key="primary",
            model=_HAIKU,
            context_window=200_000,
            temperature=0.2,
            cost_per_1m_in=0.25,
            cost_per_1m_out=1.25,
            primary=True,
            notes="Fast structured extraction",
        ),
        ModelTier(
            key="hugeContext",
            model=_GEMINI,
            context_window=2_000_000,
            temperature=0.2,
            cost_per_1m_in=1.25,
            cost_per_1m_out=5.0,
            notes="Document plus annexes beyond 200K",
        ),
        ModelTier(
            key="strictJson",
            model=_GPT4O,
            context_window=128_000,
            temperature=0.2,
            cost_per_1m_in=2.5,
            cost_per_1m_out=10.0,
            supports_strict_json=True,
            notes="Schema-enforced output",
        ),
    ),
    Stage.OCR: (
        ModelTier(
            key="primary",
            model=_GPT4O,
            context_window=128_000,
            temperature=0.1,
            cost_per_1m_in=2.5,
            cost_per_1m_out=10.0,
            supports_vision=True,
            primary=True,
            notes="Verbatim transcription of scanned evidence",
        ),
        ModelTier(
            key="costEfficient",
            model=_GPT4O_MINI,
            context_window=128_000,
            temperature=0.1,
            cost_per_1m_in=0.15,
            cost_per_1m_out=0.6,
            supports_vision=True,
        ),
    ),
    Stage.RERANKING: (
        ModelTier(
            key="primary",
            model="cohere/rerank-3.5",
            provider="cohere",
            cost_per_1k_searches=1.0,
            primary=True,
        ),
        ModelTier(
            key="alternative",
            model="voyage/rerank-2.5",
            provider="voyage",
            cost_per_1k_searches=0.5,
        ),
        ModelTier(
            key="openrouterFallback",
            model=_GPT4O_MINI,
            context_window=128_000,
            temperature=0.1,
            cost_per_1m_in=0.15,
        ),
    ),
    Stage.COMPLAINT_ANALYSIS: (
        ModelTier(
            key="primary",
            model=_SONNET,
            context_window=200_000,
            temperature=0.3,
            cost_per_1m_in=3.0,
            cost_per_1m_out=15.0,
            primary=True,
        ),
        ModelTier(
            key="strictJson",
            model=_GPT4O,
            context_window=128_000,
            temperature=0.3,
            cost_per_1m_in=2.5,
            cost_per_1m_out=10.0,
            supports_strict_json=True,
        ),
        ModelTier(
            key="giantContext",
            model=_GEMINI,
            context_window=2_000_000,
            temperature=0.3,
            cost_per_1m_in=1.25,
            cost_per_1m_out=5.0,
        ),
    ),
    Stage.LETTER_FACTS: (
        ModelTier(
            key="primary",
            model=_HAIKU,
            context_window=200_000,
            temperature=0.2,
            cost_per_1m_in=0.25,
            cost_per_1m_out=1.25,
            primary=True,
        ),
        ModelTier(
            key="ultraLowLatency",
            model=_GPT4O_MINI,
            context_window=128_000,
            temperature=0.2,
            cost_per_1m_in=0.15,
            cost_per_1m_out=0.6,
            supports_strict_json=True,
        ),
    ),
    Stage.LETTER_STRUCTURE: (
        ModelTier(
            key="primary",
            model=_SONNET,
            context_window=200_000,
            temperature=0.3,
            cost_per_1m_in=3.0,
            cost_per_1m_out=15.0,
            primary=True,
        ),
        ModelTier(
            key="schemaDriven",
            model=_GPT4O,
            context_window=128_000,
            temperature=0.3,
            cost_per_1m_in=2.5,
            cost_per_1m_out=10.0,
            supports_strict_json=True,
        ),
    ),
    Stage.LETTER_TONE: (
        ModelTier(
            key="primary",
            model="anthropic/claude-opus-4.1",
            context_window=200_000,
            temperature=0.7,
            cost_per_1m_in=15.0,
            cost_per_1m_out=75.0,
            primary=True,
        ),
        ModelTier(
            key="excellentCheaper",
            model=_GPT4O,
            context_window=128_000,
            temperature=0.7,
            cost_per_1m_in=2.5,
            cost_per_1m_out=10.0,
        ),
    ),
})


class ModelRegistry:
    """Read-only tier catalogue plus a per-call override lookup."""

    def __init__(
        self,
        tiers: Mapping[Stage, tuple[ModelTier, ...]] = DEFAULT_TIERS,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        for stage, options in tiers.items():
            primaries = [t for t in options if t.primary]
            if len(primaries) != 1:
                raise ValueError(
                    f"Stage '{stage.value}' must have exactly one primary tier, "
                    f"found {len(primaries)}"
                )
        self._tiers = MappingProxyType(dict(tiers))
        self._environ = environ if environ is not None else os.environ

    def stages(self) -> list[Stage]:
        return list(self._tiers)

    def tiers_for(self, stage: Stage) -> tuple[ModelTier, ...]:
        try:
            return self._tiers[stage]
        except KeyError as exc:
            raise KeyError(f"No tiers configured for stage '{stage.value}'") from exc

    def primary(self, stage: Stage) -> ModelTier:
        return next(t for t in self.tiers_for(stage) if t.primary)

    def resolve(self, stage: Stage) -> ModelTier:
        """Return the overridden tier if MODEL_<STAGE> names one, else primary."""
        options = self.tiers_for(stage)
        variable, override = self._override_for(stage)
        if override:
            for tier in options:
                if tier.key == override:
                    return tier
            Log.warning(
                f"{variable}={override!r} is not a tier of "
                f"'{stage.value}', using primary"
            )
        return self.primary(stage)

    def _override_for(self, stage: Stage) -> tuple[str, str]:
        """(variable, value) of the first override set; the snake-case name wins."""
        for variable in (stage.override_variable, stage.compact_override_variable):
            value = self._environ.get(variable, "").strip()
            if value:
                return variable, value
        return stage.override_variable, ""

    def estimate_cost(
        self,
        stage: Stage,
        input_tokens: int,
        output_tokens: int = 0,
    ) -> float:
        """Estimate USD cost of one call against the currently resolved tier."""
        tier = self.resolve(stage)
        if tier.cost_per_1m_in is not None:
            input_cost = input_tokens / 1_000_000 * tier.cost_per_1m_in
            output_cost = output_tokens / 1_000_000 * (tier.cost_per_1m_out or 0.0)
            return input_cost + output_cost
        if tier.cost_per_1m is not None:
            return input_tokens / 1_000_000 * tier.cost_per_1m
        return 0.0

    @staticmethod
    def structured_output_config(
        json_schema: dict[str, object],
        name: str = "structured_output",
    ) -> dict[str, object]:
        """Build the response_format payload used with strict-JSON tiers."""
        return {
            "type": "json_schema",
            "json_schema": {"name": name, "strict": True, "schema": json_schema},
        }
