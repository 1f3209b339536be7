import json
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from case_ingestion.structured.models import StructuredFields


class DocumentType(str, Enum):
    HMRC_LETTER = "hmrc_letter"
    COMPLAINT_DRAFT = "complaint_draft"
    RESPONSE = "response"
    EVIDENCE = "evidence"
    FINAL_OUTCOME = "final_outcome"


class ProcessingState(str, Enum):
    """Stages a document passes through; FAILED is terminal."""

    RECEIVED = "received"
    EXTRACTED = "extracted"
    ANONYMIZED = "anonymized"
    FIELD_EXTRACTED = "field_extracted"
    ANALYZED = "analyzed"
    EMBEDDED = "embedded"
    PERSISTED = "persisted"
    FAILED = "failed"


@dataclass(frozen=True)
class RawDocument:
    """Upload handed to the orchestrator; consumed once."""

    data: bytes = field(repr=False)
    filename: str
    case_id: str
    document_type: DocumentType


@dataclass(frozen=True)
class DocumentMetadata:
    raw_text_length: int
    extraction_method: str
    has_embedding: bool
    has_deep_analysis: bool
    analysis_absent_reason: str | None = None
    embedding_absent_reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentMetadata":
        return cls(
            raw_text_length=int(data.get("raw_text_length", 0)),
            extraction_method=str(data.get("extraction_method", "")),
            has_embedding=bool(data.get("has_embedding", False)),
            has_deep_analysis=bool(data.get("has_deep_analysis", False)),
            analysis_absent_reason=data.get("analysis_absent_reason"),
            embedding_absent_reason=data.get("embedding_absent_reason"),
        )


@dataclass(frozen=True)
class DocumentRecord:
    """The persisted unit for one uploaded document (row of the documents table)."""

    case_id: str
    document_type: DocumentType
    file_path: str
    filename: str
    structured_fields: StructuredFields
    deep_analysis: dict[str, object] | None
    embedding: list[float] | None = field(repr=False)
    metadata: DocumentMetadata
    id: str | None = None
    uploaded_at: datetime | None = None

    def to_processed_data(self) -> dict[str, object]:
        """JSONB payload stored in documents.processed_data."""
        return {
            "filename": self.filename,
            **self.structured_fields.to_dict(),
            "deep_analysis": self.deep_analysis,
            "metadata": asdict(self.metadata),
        }

    def with_identity(self, id: str, uploaded_at: datetime | None) -> "DocumentRecord":
        return replace(self, id=id, uploaded_at=uploaded_at)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DocumentRecord":
        """Build a record from a dict_row of the documents table."""
        processed = row.get("processed_data") or {}
        if isinstance(processed, str):
            processed = json.loads(processed)
        return cls(
            id=str(row["id"]),
            case_id=str(row["complaint_id"]),
            document_type=DocumentType(row["document_type"]),
            file_path=row["file_path"],
            filename=str(processed.get("filename", "")),
            structured_fields=StructuredFields.from_dict(processed),
            deep_analysis=processed.get("deep_analysis"),
            embedding=parse_vector(row.get("embedding")),
            metadata=DocumentMetadata.from_dict(processed.get("metadata") or {}),
            uploaded_at=row.get("uploaded_at"),
        )


def format_vector(vector: list[float] | None) -> str | None:
    """pgvector text form, e.g. "[0.1,0.2]"."""
    if vector is None:
        return None
    return "[" + ",".join(repr(float(v)) for v in vector) + "]"


def parse_vector(value: Any) -> list[float] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [float(v) for v in json.loads(value)]
    return [float(v) for v in value]
