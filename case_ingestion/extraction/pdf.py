import io
from abc import ABC, abstractmethod
from typing import ClassVar

import pdfplumber
import pymupdf

from case_ingestion.extraction.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Contract for native PDF text-layer readers."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Return the text layer of every page, pages separated by blank lines.

        An image-only (scanned) PDF yields an empty string, not an error.

        Raises:
            PdfExtractionError: if the bytes cannot be opened as a PDF.
        """


class PdfPlumberExtractor(BasePdfExtractor):
    """Reads the PDF text layer with pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [(page.extract_text() or "").strip() for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read PDF: {exc}") from exc
        return "\n\n".join(p for p in pages if p)


class PyMuPdfExtractor(BasePdfExtractor):
    """Reads the PDF text layer with PyMuPDF, in reading order."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text("text", sort=True).strip() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read PDF: {exc}") from exc
        return "\n\n".join(p for p in pages if p)


class PdfExtractorFactory:
    """Creates the PDF reader selected by ``settings.pdf_engine``."""

    ENGINES: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pdfplumber": PdfPlumberExtractor,
        "pymupdf": PyMuPdfExtractor,
    }

    @classmethod
    def create(cls, engine: str) -> BasePdfExtractor:
        extractor_cls = cls.ENGINES.get(engine.lower())
        if extractor_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ENGINES)}"
            )
        return extractor_cls()
