class ExtractionFailure(Exception):
    """Base exception for format-specific text extraction failures."""


class PdfExtractionError(ExtractionFailure):
    """Raised when a PDF cannot be parsed."""


class DocxExtractionError(ExtractionFailure):
    """Raised when a Word document cannot be parsed."""


class SpreadsheetExtractionError(ExtractionFailure):
    """Raised when a workbook or CSV file cannot be parsed."""


class OcrError(ExtractionFailure):
    """Raised when the vision model cannot transcribe an image."""


class OcrTimeoutError(OcrError):
    """Raised when the OCR call exceeds its timeout. Escapes the adapter."""
