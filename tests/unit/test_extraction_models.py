import pytest

from case_ingestion.extraction.models import (
    PLACEHOLDER_MARKERS,
    DocumentFormat,
    ExtractedText,
    ExtractionMethod,
    file_extension,
    unsupported_placeholder,
)


class TestDocumentFormat:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("letter.pdf", DocumentFormat.PDF),
            ("LETTER.PDF", DocumentFormat.PDF),
            ("draft.docx", DocumentFormat.DOCX),
            ("old.doc", DocumentFormat.DOCX),
            ("notes.txt", DocumentFormat.TEXT),
            ("ledger.xlsx", DocumentFormat.SPREADSHEET),
            ("ledger.xls", DocumentFormat.SPREADSHEET),
            ("ledger.csv", DocumentFormat.SPREADSHEET),
            ("scan.png", DocumentFormat.IMAGE),
            ("scan.JPEG", DocumentFormat.IMAGE),
            ("scan.webp", DocumentFormat.IMAGE),
            ("bundle.zip", DocumentFormat.UNSUPPORTED),
            ("no_extension", DocumentFormat.UNSUPPORTED),
        ],
    )
    def test_resolves_from_extension(self, filename: str, expected: DocumentFormat) -> None:
        assert DocumentFormat.from_filename(filename) == expected


class TestFileExtension:
    def test_lowercases_and_strips_dot(self) -> None:
        assert file_extension("Evidence.PNG") == "png"

    def test_handles_windows_paths(self) -> None:
        assert file_extension("C:\\uploads\\letter.Pdf") == "pdf"

    def test_empty_without_extension(self) -> None:
        assert file_extension("README") == ""


class TestExtractedText:
    def test_rejects_empty_text(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            ExtractedText(text="", success=True, method=ExtractionMethod.PLAIN)

    def test_failed_builds_placeholder(self) -> None:
        result = ExtractedText.failed("broken file")
        assert result.success is False
        assert result.method == ExtractionMethod.FAILED
        assert result.error == "broken file"
        assert result.text.startswith("[Document text extraction failed")
        assert "broken file" in result.text


class TestPlaceholders:
    def test_unsupported_placeholder_names_extension(self) -> None:
        assert unsupported_placeholder("zip") == (
            "[Unsupported file type: .zip - stored for manual review]"
        )

    def test_unsupported_placeholder_is_a_marker(self) -> None:
        text = unsupported_placeholder("zip")
        assert any(marker in text for marker in PLACEHOLDER_MARKERS)
