"""Format-aware text extraction.

The format is resolved once from the file extension and dispatched through a
handler table that must cover every DocumentFormat. Every branch returns an
ExtractedText; the only exception allowed out is OcrTimeoutError.
"""

from collections.abc import Callable

from case_ingestion.extraction.docx_reader import DocxReader
from case_ingestion.extraction.exceptions import ExtractionFailure, OcrTimeoutError
from case_ingestion.extraction.image_ocr import ImageOcrReader
from case_ingestion.extraction.models import (
    PDF_NO_TEXT_PLACEHOLDER,
    DocumentFormat,
    ExtractedText,
    ExtractionMethod,
    file_extension,
    ocr_failure_placeholder,
    unsupported_placeholder,
)
from case_ingestion.extraction.pdf import BasePdfExtractor
from case_ingestion.extraction.spreadsheet_reader import SpreadsheetReader
from case_ingestion.logging.logger import Log

_Handler = Callable[[bytes, str], ExtractedText]


class ExtractionAdapter:
    """Produces plain text from raw upload bytes."""

    def __init__(
        self,
        *,
        pdf_extractor: BasePdfExtractor,
        ocr_reader: ImageOcrReader,
        docx_reader: DocxReader | None = None,
        spreadsheet_reader: SpreadsheetReader | None = None,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._ocr_reader = ocr_reader
        self._docx_reader = docx_reader or DocxReader()
        self._spreadsheet_reader = spreadsheet_reader or SpreadsheetReader()
        self._handlers: dict[DocumentFormat, _Handler] = {
            DocumentFormat.PDF: self._extract_pdf,
            DocumentFormat.DOCX: self._extract_docx,
            DocumentFormat.TEXT: self._extract_plain,
            DocumentFormat.SPREADSHEET: self._extract_spreadsheet,
            DocumentFormat.IMAGE: self._extract_image,
            DocumentFormat.UNSUPPORTED: self._extract_unsupported,
        }
        missing = set(DocumentFormat) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No extraction handler for: {sorted(f.value for f in missing)}")

    def extract_text(self, data: bytes, filename: str) -> ExtractedText:
        """Extract text from *data*, choosing the reader by *filename*'s extension.

        Raises:
            OcrTimeoutError: the OCR call for an image exceeded its timeout.
        """
        document_format = DocumentFormat.from_filename(filename)
        Log.info(f"Extracting {filename} ({len(data)} bytes) as {document_format.value}")
        try:
            result = self._handlers[document_format](data, filename)
        except OcrTimeoutError:
            raise
        except ExtractionFailure as exc:
            Log.warning(f"Extraction failed for {filename}: {exc}")
            result = ExtractedText.failed(str(exc))
        except Exception as exc:
            Log.exception(f"Unexpected error extracting {filename}", exc)
            result = ExtractedText.failed(f"unexpected {type(exc).__name__}: {exc}")

        Log.info(
            f"Extracted {len(result.text)} chars from {filename} "
            f"via {result.method.value} (success={result.success})"
        )
        return result

    def _extract_pdf(self, data: bytes, filename: str) -> ExtractedText:
        text = self._pdf_extractor.extract(data)
        if not text.strip():
            return ExtractedText(
                text=PDF_NO_TEXT_PLACEHOLDER,
                success=False,
                method=ExtractionMethod.FAILED,
                error="PDF contains no extractable text",
            )
        return ExtractedText(text=text, success=True, method=ExtractionMethod.NATIVE_PDF)

    def _extract_docx(self, data: bytes, filename: str) -> ExtractedText:
        text = self._docx_reader.extract(data)
        if not text.strip():
            return ExtractedText.failed("Word document contains no text")
        return ExtractedText(text=text, success=True, method=ExtractionMethod.DOCX)

    def _extract_plain(self, data: bytes, filename: str) -> ExtractedText:
        text = data.decode("utf-8", errors="replace")
        if not text.strip():
            return ExtractedText.failed("text file is empty")
        return ExtractedText(text=text, success=True, method=ExtractionMethod.PLAIN)

    def _extract_spreadsheet(self, data: bytes, filename: str) -> ExtractedText:
        text = self._spreadsheet_reader.extract(data, filename)
        if not text.strip():
            return ExtractedText.failed("spreadsheet contains no data")
        return ExtractedText(text=text, success=True, method=ExtractionMethod.SPREADSHEET)

    def _extract_image(self, data: bytes, filename: str) -> ExtractedText:
        try:
            text = self._ocr_reader.extract(data)
        except OcrTimeoutError:
            raise
        except ExtractionFailure as exc:
            Log.warning(f"OCR failed for {filename}: {exc}")
            return ExtractedText(
                text=ocr_failure_placeholder(str(exc)),
                success=False,
                method=ExtractionMethod.FAILED,
                error=str(exc),
            )
        return ExtractedText(text=text, success=True, method=ExtractionMethod.OCR)

    def _extract_unsupported(self, data: bytes, filename: str) -> ExtractedText:
        return ExtractedText(
            text=unsupported_placeholder(file_extension(filename)),
            success=True,
            method=ExtractionMethod.UNSUPPORTED,
        )
