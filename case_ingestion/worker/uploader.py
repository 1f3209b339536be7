import mimetypes
from dataclasses import dataclass, field
from datetime import datetime

from case_ingestion.logging.logger import Log
from case_ingestion.processor.exceptions import ProcessingError
from case_ingestion.processor.models import DocumentRecord, DocumentType
from case_ingestion.processor.processor import IngestionOrchestrator
from case_ingestion.storage.base import BaseStorage, StorageError
from case_ingestion.storage.local_storage import build_storage_path

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadRequest:
    data: bytes = field(repr=False)
    filename: str
    case_id: str
    document_type: DocumentType
    content_type: str | None = None
    sensitive_words: list[str] = field(default_factory=list)


def guess_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or DEFAULT_CONTENT_TYPE


class DocumentUploader:
    """Stores an upload, then hands it to the orchestrator."""

    def __init__(self, storage: BaseStorage, orchestrator: IngestionOrchestrator) -> None:
        self._storage = storage
        self._orchestrator = orchestrator

    def upload(self, request: UploadRequest, now: datetime | None = None) -> DocumentRecord:
        """Store and process one upload.

        Raises:
            ProcessingError: storage write or processing failed.
        """
        path = build_storage_path(
            request.case_id, request.document_type.value, request.filename, now
        )
        content_type = request.content_type or guess_content_type(request.filename)
        try:
            stored_path = self._storage.store(path, request.data, content_type)
        except StorageError as exc:
            Log.error(f"Upload of {request.filename} failed: {exc}")
            raise ProcessingError(f"Failed to upload file: {exc}", cause=exc) from exc

        return self._orchestrator.process_document(
            request.data,
            request.case_id,
            request.document_type,
            stored_path,
            filename=request.filename,
            sensitive_words=request.sensitive_words,
        )
