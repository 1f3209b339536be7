import pytest

from case_ingestion.extraction.exceptions import PdfExtractionError
from case_ingestion.extraction.pdf import (
    PdfExtractorFactory,
    PdfPlumberExtractor,
    PyMuPdfExtractor,
)


class TestPdfExtractorFactory:
    def test_creates_pdfplumber_extractor(self) -> None:
        assert isinstance(PdfExtractorFactory.create("pdfplumber"), PdfPlumberExtractor)

    def test_creates_pymupdf_extractor(self) -> None:
        assert isinstance(PdfExtractorFactory.create("PyMuPDF"), PyMuPdfExtractor)

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine 'pdfminer'"):
            PdfExtractorFactory.create("pdfminer")


@pytest.mark.parametrize("extractor_cls", [PdfPlumberExtractor, PyMuPdfExtractor])
class TestPdfExtractors:
    def test_extracts_text(self, extractor_cls: type, sample_pdf_bytes: bytes) -> None:
        text = extractor_cls().extract(sample_pdf_bytes)
        assert "BT/2024/12345" in text
        assert "15 March 2024" in text

    def test_separates_pages_with_blank_line(
        self, extractor_cls: type, multi_page_pdf_bytes: bytes
    ) -> None:
        text = extractor_cls().extract(multi_page_pdf_bytes)
        assert text == "Page one content\n\nPage two content"

    def test_blank_pdf_yields_empty_string(
        self, extractor_cls: type, empty_pdf_bytes: bytes
    ) -> None:
        assert extractor_cls().extract(empty_pdf_bytes) == ""

    def test_invalid_bytes_raise(self, extractor_cls: type) -> None:
        with pytest.raises(PdfExtractionError):
            extractor_cls().extract(b"not a pdf at all")
