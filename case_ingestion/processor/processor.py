import re
from collections.abc import Sequence
from pathlib import PurePosixPath

from case_ingestion.analysis.document_analyzer import DocumentAnalyzer
from case_ingestion.analysis.embedder import DocumentEmbedder
from case_ingestion.anonymization.anonymizer import Anonymizer
from case_ingestion.config.settings import Settings
from case_ingestion.database.repositories.documents_repository import DocumentsRepository
from case_ingestion.extraction.adapter import ExtractionAdapter
from case_ingestion.extraction.image_ocr import ImageOcrReader
from case_ingestion.extraction.pdf import PdfExtractorFactory
from case_ingestion.llm.factory import LLMClientFactory
from case_ingestion.llm.registry import ModelRegistry
from case_ingestion.logging.logger import Log
from case_ingestion.processor.exceptions import ProcessingError
from case_ingestion.processor.models import (
    DocumentRecord,
    DocumentType,
    ProcessingState,
    RawDocument,
)
from case_ingestion.processor.pipeline import PipelineContext, PipelineStep
from case_ingestion.processor.steps import (
    AnonymizeStep,
    DeepAnalysisStep,
    EmbeddingStep,
    ExtractFieldsStep,
    ExtractTextStep,
    PersistDocumentStep,
)
from case_ingestion.structured.field_extractor import StructuredFieldExtractor

_TIMESTAMP_PREFIX_RE = re.compile(r"^\d+_")


def filename_from_storage_path(storage_path: str) -> str:
    """'case-1/evidence/1710500000000_letter.pdf' -> 'letter.pdf'."""
    return _TIMESTAMP_PREFIX_RE.sub("", PurePosixPath(storage_path).name, count=1)


class IngestionOrchestrator:
    """Runs one uploaded document through the ingestion pipeline.

    Pipeline: extract -> anonymize -> structured fields -> deep analysis ->
    embedding -> persist. Optional stages degrade to absent values; only an
    anonymization or persistence failure aborts, surfaced as ProcessingError.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def process_document(
        self,
        data: bytes,
        case_id: str,
        document_type: DocumentType | str,
        storage_path: str,
        filename: str | None = None,
        sensitive_words: list[str] | None = None,
    ) -> DocumentRecord:
        """Process one document and return the stored record.

        Raises:
            ProcessingError: the record could not be produced; ``cause`` holds
                the original exception.
        """
        try:
            document = RawDocument(
                data=data,
                filename=filename or filename_from_storage_path(storage_path),
                case_id=case_id,
                document_type=DocumentType(document_type),
            )
        except ValueError as exc:
            raise ProcessingError(f"Invalid document: {exc}", cause=exc) from exc

        context = PipelineContext(
            document=document,
            storage_path=storage_path,
            sensitive_words=list(sensitive_words or []),
        )
        Log.info(
            f"Processing {context.label} ({document.document_type.value}, "
            f"{len(data)} bytes)"
        )
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            failed_in = context.state.value
            context.state = ProcessingState.FAILED
            Log.exception(
                f"Document processing failed for {context.label} after state {failed_in}",
                exc,
            )
            raise ProcessingError(f"Failed to process document: {exc}", cause=exc) from exc

        if context.record is None:
            error = RuntimeError("pipeline finished without persisting a record")
            raise ProcessingError(f"Failed to process document: {error}", cause=error)
        return context.record


def build_orchestrator(
    settings: Settings,
    registry: ModelRegistry | None = None,
    repository: DocumentsRepository | None = None,
) -> IngestionOrchestrator:
    """Build an IngestionOrchestrator with all required adapters."""
    invoker = LLMClientFactory.create_invoker(settings, registry)
    adapter = ExtractionAdapter(
        pdf_extractor=PdfExtractorFactory.create(settings.pdf_engine),
        ocr_reader=ImageOcrReader(
            invoker,
            timeout_seconds=settings.ocr_timeout_seconds,
            temperature=settings.ocr_temperature,
            max_tokens=settings.ocr_max_tokens,
        ),
    )
    analyzer = DocumentAnalyzer(
        invoker,
        max_tokens=settings.analysis_max_tokens,
        temperature=settings.analysis_temperature,
        max_input_chars=settings.analysis_max_input_chars,
    )
    steps: list[PipelineStep] = [
        ExtractTextStep(adapter, min_chars=settings.meaningful_text_min_chars),
        AnonymizeStep(Anonymizer()),
        ExtractFieldsStep(StructuredFieldExtractor()),
        DeepAnalysisStep(analyzer),
        EmbeddingStep(DocumentEmbedder(invoker)),
        PersistDocumentStep(repository or DocumentsRepository()),
    ]
    return IngestionOrchestrator(steps)
