from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from case_ingestion.logging.logger import Log
from case_ingestion.processor.exceptions import ProcessingError
from case_ingestion.processor.models import DocumentRecord
from case_ingestion.worker.uploader import DocumentUploader, UploadRequest


@dataclass(frozen=True)
class BatchItemResult:
    filename: str
    record: DocumentRecord | None = None
    error: ProcessingError | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


class BatchIngestor:
    """Uploads several documents with a bounded number in flight.

    Each document runs its own pipeline; a failed document never cancels
    the others. Results come back in request order.
    """

    def __init__(self, uploader: DocumentUploader, max_workers: int = 4) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._uploader = uploader
        self._max_workers = max_workers

    def ingest(self, requests: Sequence[UploadRequest]) -> list[BatchItemResult]:
        if not requests:
            return []
        Log.info(f"Ingesting {len(requests)} documents, {self._max_workers} at a time")
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            results = list(pool.map(self._ingest_one, requests))
        failed = sum(1 for result in results if not result.ok)
        Log.info(f"Batch complete: {len(results) - failed} stored, {failed} failed")
        return results

    def _ingest_one(self, request: UploadRequest) -> BatchItemResult:
        try:
            record = self._uploader.upload(request)
        except ProcessingError as exc:
            Log.error(f"Document {request.filename} failed: {exc}")
            return BatchItemResult(filename=request.filename, error=exc)
        except Exception as exc:
            Log.exception(f"Document {request.filename} crashed", exc)
            error = ProcessingError(f"Failed to process document: {exc}", cause=exc)
            return BatchItemResult(filename=request.filename, error=error)
        return BatchItemResult(filename=request.filename, record=record)
