from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath


class DocumentFormat(str, Enum):
    """Closed set of formats the extraction adapter knows how to read."""

    PDF = "pdf"
    DOCX = "docx"
    TEXT = "text"
    SPREADSHEET = "spreadsheet"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_filename(cls, filename: str) -> "DocumentFormat":
        return _EXTENSION_FORMATS.get(file_extension(filename), cls.UNSUPPORTED)


_EXTENSION_FORMATS: dict[str, DocumentFormat] = {
    "pdf": DocumentFormat.PDF,
    "docx": DocumentFormat.DOCX,
    "doc": DocumentFormat.DOCX,
    "txt": DocumentFormat.TEXT,
    "xlsx": DocumentFormat.SPREADSHEET,
    "xls": DocumentFormat.SPREADSHEET,
    "csv": DocumentFormat.SPREADSHEET,
    "png": DocumentFormat.IMAGE,
    "jpg": DocumentFormat.IMAGE,
    "jpeg": DocumentFormat.IMAGE,
    "gif": DocumentFormat.IMAGE,
    "bmp": DocumentFormat.IMAGE,
    "tiff": DocumentFormat.IMAGE,
    "webp": DocumentFormat.IMAGE,
}


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot, '' when there is none."""
    return PurePosixPath(filename.replace("\\", "/")).suffix.lstrip(".").lower()


class ExtractionMethod(str, Enum):
    NATIVE_PDF = "native-pdf"
    DOCX = "docx"
    PLAIN = "plain"
    SPREADSHEET = "spreadsheet"
    OCR = "ocr"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"


# Placeholder texts. Every one starts with "[" so they never look like prose,
# and any of the markers below disables the optional analysis stages.
EXTRACTION_PENDING_MARKER = "[Document text extraction pending"
EXTRACTION_FAILED_MARKER = "[Document text extraction failed"
PDF_NO_TEXT_PLACEHOLDER = (
    f"{EXTRACTION_FAILED_MARKER}: PDF contains no extractable text - may be scanned image]"
)
OCR_FAILED_PREFIX = "[Image OCR failed"
UNSUPPORTED_PREFIX = "[Unsupported file type"

PLACEHOLDER_MARKERS: tuple[str, ...] = (
    EXTRACTION_PENDING_MARKER,
    EXTRACTION_FAILED_MARKER,
    OCR_FAILED_PREFIX,
    UNSUPPORTED_PREFIX,
)


def failure_placeholder(reason: str) -> str:
    return f"{EXTRACTION_FAILED_MARKER}: {reason}]"


def ocr_failure_placeholder(reason: str) -> str:
    return f"{OCR_FAILED_PREFIX}: {reason}]"


def unsupported_placeholder(extension: str) -> str:
    shown = f".{extension}" if extension else "(no extension)"
    return f"{UNSUPPORTED_PREFIX}: {shown} - stored for manual review]"


@dataclass(frozen=True)
class ExtractedText:
    """Text produced from one uploaded file.

    ``text`` is never empty: failures carry a readable placeholder so that
    downstream length checks behave predictably.
    """

    text: str
    success: bool
    method: ExtractionMethod
    error: str | None = None

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("ExtractedText.text must not be empty")

    @classmethod
    def failed(cls, reason: str) -> "ExtractedText":
        return cls(
            text=failure_placeholder(reason),
            success=False,
            method=ExtractionMethod.FAILED,
            error=reason,
        )
