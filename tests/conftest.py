import io

import docx
import openpyxl
import pytest
import xlwt  # type: ignore[import-untyped]
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "HMRC reference BT/2024/12345")
    c.drawString(72, 700, "Letter dated 15 March 2024")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Word document with two paragraphs and a one-row table."""
    document = docx.Document()
    document.add_paragraph("Complaint regarding SEIS3 relief for 2023/24")
    document.add_paragraph("Investment of £125,000 was made on 15 March 2024")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Reference"
    table.rows[0].cells[1].text = "BT/2024/12345"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def empty_docx_bytes() -> bytes:
    buf = io.BytesIO()
    docx.Document().save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_xlsx_bytes() -> bytes:
    """Workbook with two sheets, a blank row in the first."""
    workbook = openpyxl.Workbook()
    first = workbook.active
    first.title = "Timeline"
    first.append(["Date", "Event"])
    first.append([None, None])
    first.append(["15 March 2024", "Claim submitted"])
    second = workbook.create_sheet("Costs")
    second.append(["Item", "Amount"])
    second.append(["Fees", 350])
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_xls_bytes() -> bytes:
    """Legacy BIFF workbook with the same two sheets as sample_xlsx_bytes."""
    workbook = xlwt.Workbook()
    first = workbook.add_sheet("Timeline")
    first.write(0, 0, "Date")
    first.write(0, 1, "Event")
    first.write(2, 0, "15 March 2024")
    first.write(2, 1, "Claim submitted")
    second = workbook.add_sheet("Costs")
    second.write(0, 0, "Item")
    second.write(0, 1, "Amount")
    second.write(1, 0, "Fees")
    second.write(1, 1, 350)
    second.write(2, 0, "Interest")
    second.write(2, 1, 12.5)
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_png_bytes() -> bytes:
    """A small white PNG; OCR output is mocked so the pixels do not matter."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def sample_jpeg_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), color="white").save(buf, format="JPEG")
    return buf.getvalue()
