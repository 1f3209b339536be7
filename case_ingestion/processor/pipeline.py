from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from case_ingestion.analysis.outcome import SKIPPED_NOT_MEANINGFUL, StageOutcome
from case_ingestion.anonymization.models import AnonymizationResult
from case_ingestion.extraction.models import ExtractedText
from case_ingestion.processor.models import DocumentRecord, ProcessingState, RawDocument
from case_ingestion.structured.models import StructuredFields


@dataclass(slots=True)
class PipelineContext:
    document: RawDocument
    storage_path: str
    sensitive_words: list[str] = field(default_factory=list)
    state: ProcessingState = ProcessingState.RECEIVED
    extracted: ExtractedText | None = None
    anonymization_result: AnonymizationResult | None = None
    structured_fields: StructuredFields = field(default_factory=StructuredFields)
    meaningful: bool = False
    deep_analysis: StageOutcome[dict[str, object]] = field(
        default_factory=lambda: StageOutcome.absent(SKIPPED_NOT_MEANINGFUL)
    )
    embedding: StageOutcome[list[float]] = field(
        default_factory=lambda: StageOutcome.absent(SKIPPED_NOT_MEANINGFUL)
    )
    record: DocumentRecord | None = None

    @property
    def label(self) -> str:
        return f"{self.document.case_id}/{self.document.filename}"


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
