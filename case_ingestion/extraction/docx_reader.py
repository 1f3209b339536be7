import io

import docx

from case_ingestion.extraction.exceptions import DocxExtractionError


class DocxReader:
    """Raw text of a Word document: body paragraphs, then table rows."""

    def extract(self, data: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(data))
        except Exception as exc:
            raise DocxExtractionError(f"python-docx could not open document: {exc}") from exc

        lines = [p.text.strip() for p in document.paragraphs if p.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))
        return "\n".join(lines)
