from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from case_ingestion.logging.logger import Log
from case_ingestion.storage.base import BaseStorage, StorageError


def build_storage_path(
    case_id: str,
    document_type: str,
    filename: str,
    now: datetime | None = None,
) -> str:
    """Build the object path: {case_id}/{document_type}/{epoch_ms}_{filename}"""
    moment = now or datetime.now(timezone.utc)
    safe_name = PurePosixPath(filename.replace("\\", "/")).name
    return f"{case_id}/{document_type}/{int(moment.timestamp() * 1000)}_{safe_name}"


class LocalFileStorage(BaseStorage):
    """Stores uploads on the local filesystem under a root directory."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = (files_root if files_root is not None else self.FILES_ROOT).resolve()

    def store(self, path: str, data: bytes, content_type: str) -> str:
        target = self._resolve_path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except (OSError, ValueError) as exc:
            raise StorageError(f"Failed to store {path}: {exc}") from exc
        Log.info(f"Stored {len(data)} bytes ({content_type}) at {path}")
        return path

    def _resolve_path(self, path: str) -> Path:
        try:
            target = (self._files_root / path).resolve()
        except (OSError, ValueError) as exc:
            raise StorageError(f"Invalid storage path {path!r}: {exc}") from exc
        if target == self._files_root or not target.is_relative_to(self._files_root):
            raise StorageError(f"Path escapes storage root: {path}")
        return target
