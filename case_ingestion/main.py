import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from case_ingestion.config.settings import Settings
from case_ingestion.database.connection import close_pool, init_pool
from case_ingestion.logging.logger import Log
from case_ingestion.processor.exceptions import ProcessingError
from case_ingestion.processor.models import DocumentType
from case_ingestion.processor.processor import build_orchestrator
from case_ingestion.storage.local_storage import LocalFileStorage
from case_ingestion.worker.batch import BatchIngestor, BatchItemResult
from case_ingestion.worker.uploader import DocumentUploader, UploadRequest


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="case_ingestion",
        description="Ingest evidence files into a complaint case.",
    )
    parser.add_argument("--case-id", required=True, help="Complaint case identifier")
    parser.add_argument(
        "--document-type",
        required=True,
        choices=[t.value for t in DocumentType],
    )
    parser.add_argument(
        "--sensitive-word",
        action="append",
        default=[],
        dest="sensitive_words",
        help="Case-specific word to anonymize (repeatable)",
    )
    parser.add_argument("files", nargs="+", type=Path)
    return parser.parse_args(argv)


def summary_line(result: BatchItemResult) -> str:
    if result.record is None:
        return f"FAILED  {result.filename}: {result.error}"
    meta = result.record.metadata
    return (
        f"STORED  {result.filename}: id={result.record.id} "
        f"method={meta.extraction_method} chars={meta.raw_text_length} "
        f"analysis={meta.has_deep_analysis} embedding={meta.has_embedding}"
    )


def load_request(path: Path, args: argparse.Namespace) -> UploadRequest | BatchItemResult:
    """Read one input file; an unreadable file becomes a failed result."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        Log.error(f"Cannot read {path}: {exc}")
        error = ProcessingError(f"Failed to read file: {exc}", cause=exc)
        return BatchItemResult(filename=path.name, error=error)
    return UploadRequest(
        data=data,
        filename=path.name,
        case_id=args.case_id,
        document_type=DocumentType(args.document_type),
        sensitive_words=args.sensitive_words,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse args -> initialize pool -> run the batch -> report."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, settings.third_party_log_level)
    init_pool(settings)

    try:
        uploader = DocumentUploader(
            LocalFileStorage(Path(settings.files_root)),
            build_orchestrator(settings),
        )
        loaded = [load_request(path, args) for path in args.files]
        requests = [item for item in loaded if isinstance(item, UploadRequest)]
        ingested = iter(
            BatchIngestor(uploader, settings.max_concurrent_documents).ingest(requests)
        )
        results = [
            next(ingested) if isinstance(item, UploadRequest) else item for item in loaded
        ]
    finally:
        close_pool()

    for result in results:
        print(summary_line(result))
    return 0 if all(result.ok for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
