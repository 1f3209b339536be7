from case_ingestion.analysis.document_analyzer import DocumentAnalyzer
from case_ingestion.analysis.embedder import DocumentEmbedder
from case_ingestion.analysis.outcome import StageOutcome
from case_ingestion.anonymization.base import BaseAnonymizer
from case_ingestion.database.repositories.documents_repository import DocumentsRepository
from case_ingestion.extraction.adapter import ExtractionAdapter
from case_ingestion.extraction.exceptions import OcrTimeoutError
from case_ingestion.extraction.models import (
    ExtractedText,
    ExtractionMethod,
    ocr_failure_placeholder,
)
from case_ingestion.logging.logger import Log
from case_ingestion.processor.gating import MEANINGFUL_TEXT_MIN_CHARS, is_meaningful_text
from case_ingestion.processor.models import DocumentMetadata, DocumentRecord, ProcessingState
from case_ingestion.processor.pipeline import PipelineContext, PipelineStep
from case_ingestion.structured.field_extractor import StructuredFieldExtractor
from case_ingestion.structured.models import StructuredFields


def _require_text(context: PipelineContext) -> ExtractedText:
    if context.extracted is None:
        raise ValueError("PipelineContext.extracted must be set before this step")
    return context.extracted


def _require_anonymized(context: PipelineContext) -> str:
    if context.anonymization_result is None:
        raise ValueError("PipelineContext.anonymization_result must be set before this step")
    return context.anonymization_result.anonymized_text


class ExtractTextStep(PipelineStep):
    """Never fails: every extraction problem ends up as a placeholder text."""

    def __init__(
        self,
        adapter: ExtractionAdapter,
        min_chars: int = MEANINGFUL_TEXT_MIN_CHARS,
    ) -> None:
        self._adapter = adapter
        self._min_chars = min_chars

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        try:
            extracted = self._adapter.extract_text(document.data, document.filename)
        except OcrTimeoutError as exc:
            Log.warning(f"OCR timed out for {context.label}: {exc}")
            extracted = ExtractedText(
                text=ocr_failure_placeholder(str(exc)),
                success=False,
                method=ExtractionMethod.FAILED,
                error=str(exc),
            )
        except Exception as exc:
            Log.exception(f"Text extraction crashed for {context.label}", exc)
            extracted = ExtractedText.failed(f"{type(exc).__name__}: {exc}")

        context.extracted = extracted
        context.meaningful = is_meaningful_text(extracted.text, self._min_chars)
        context.state = ProcessingState.EXTRACTED
        Log.info(
            f"Extracted {len(extracted.text)} chars from {context.label} "
            f"via {extracted.method.value} (success={extracted.success})"
        )
        return context


class AnonymizeStep(PipelineStep):
    def __init__(self, anonymizer: BaseAnonymizer) -> None:
        self._anonymizer = anonymizer

    def run(self, context: PipelineContext) -> PipelineContext:
        extracted = _require_text(context)
        context.anonymization_result = self._anonymizer.anonymize(
            extracted.text,
            sensitive_words=context.sensitive_words,
        )
        context.state = ProcessingState.ANONYMIZED
        Log.info(
            f"Anonymized {context.label}: "
            f"{len(context.anonymization_result.artifacts)} artifacts found"
        )
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(self, extractor: StructuredFieldExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        text = _require_anonymized(context)
        try:
            context.structured_fields = self._extractor.extract(text)
        except Exception as exc:
            Log.exception(f"Structured field extraction crashed for {context.label}", exc)
            context.structured_fields = StructuredFields()
        context.state = ProcessingState.FIELD_EXTRACTED
        fields = context.structured_fields
        Log.info(
            f"Structured fields for {context.label}: {len(fields.dates)} dates, "
            f"{len(fields.amounts)} amounts, {len(fields.references)} references"
        )
        return context


class DeepAnalysisStep(PipelineStep):
    def __init__(self, analyzer: DocumentAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.meaningful:
            Log.info(f"Skipping deep analysis for {context.label} (insufficient text)")
            return context
        text = _require_anonymized(context)
        try:
            context.deep_analysis = self._analyzer.analyze(
                text, context.document.document_type.value
            )
        except Exception as exc:
            Log.exception(f"Deep analysis crashed for {context.label}", exc)
            context.deep_analysis = StageOutcome.absent(f"{type(exc).__name__}: {exc}")
        if context.deep_analysis.present:
            context.state = ProcessingState.ANALYZED
        return context


class EmbeddingStep(PipelineStep):
    def __init__(self, embedder: DocumentEmbedder) -> None:
        self._embedder = embedder

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.meaningful:
            Log.info(f"Skipping embedding for {context.label} (insufficient text)")
            return context
        text = _require_anonymized(context)
        try:
            context.embedding = self._embedder.embed(text)
        except Exception as exc:
            Log.exception(f"Embedding crashed for {context.label}", exc)
            context.embedding = StageOutcome.absent(f"{type(exc).__name__}: {exc}")
        if context.embedding.present:
            context.state = ProcessingState.EMBEDDED
        return context


class PersistDocumentStep(PipelineStep):
    def __init__(self, repository: DocumentsRepository) -> None:
        self._repository = repository

    def run(self, context: PipelineContext) -> PipelineContext:
        extracted = _require_text(context)
        document = context.document
        record = DocumentRecord(
            case_id=document.case_id,
            document_type=document.document_type,
            file_path=context.storage_path,
            filename=document.filename,
            structured_fields=context.structured_fields,
            deep_analysis=context.deep_analysis.value,
            embedding=context.embedding.value,
            metadata=DocumentMetadata(
                raw_text_length=len(extracted.text),
                extraction_method=extracted.method.value,
                has_embedding=context.embedding.present,
                has_deep_analysis=context.deep_analysis.present,
                analysis_absent_reason=context.deep_analysis.absent_reason,
                embedding_absent_reason=context.embedding.absent_reason,
            ),
        )
        context.record = self._repository.insert(record)
        context.state = ProcessingState.PERSISTED
        Log.info(f"Document {context.record.id} stored for {context.label}")
        return context
