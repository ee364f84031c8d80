import io

import docx
import docx.document
import pptx
import pytest
import xlwt
from openpyxl import Workbook
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setFont("Helvetica", 28)
    c.drawString(72, 700, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def three_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF; the middle page is blank."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setFont("Helvetica", 28)
    c.drawString(72, 700, "Hello")
    c.showPage()
    c.showPage()
    c.setFont("Helvetica", 28)
    c.drawString(72, 700, "World")
    c.save()
    return buf.getvalue()


def _png(color: str) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A small white PNG image."""
    return _png("white")


def _docx_bytes(document: docx.document.Document) -> bytes:
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def docx_with_images_bytes() -> bytes:
    """A Word document with one paragraph and two distinct embedded PNGs."""
    document = docx.Document()
    document.add_paragraph("Quarterly summary")
    document.add_picture(io.BytesIO(_png("red")))
    document.add_picture(io.BytesIO(_png("blue")))
    return _docx_bytes(document)


@pytest.fixture()
def text_only_docx_bytes() -> bytes:
    """A Word document with a paragraph and a table but no images."""
    document = docx.Document()
    document.add_paragraph("Quarterly revenue rose 12%")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Region"
    table.cell(0, 1).text = "North"
    return _docx_bytes(document)


@pytest.fixture()
def blank_docx_bytes() -> bytes:
    return _docx_bytes(docx.Document())


@pytest.fixture()
def pptx_bytes() -> bytes:
    """Two slides: a titled content slide and a slide without text."""
    presentation = pptx.Presentation()
    slide = presentation.slides.add_slide(presentation.slide_layouts[1])
    slide.shapes.title.text = "Roadmap"
    slide.placeholders[1].text = "Ship v2"
    presentation.slides.add_slide(presentation.slide_layouts[6])
    buf = io.BytesIO()
    presentation.save(buf)
    return buf.getvalue()


@pytest.fixture()
def legacy_xls_bytes() -> bytes:
    """A one-sheet BIFF (.xls) workbook written with xlwt."""
    workbook = xlwt.Workbook()
    sheet = workbook.add_sheet("Legacy")
    for row, values in enumerate([("Region", "Amount"), ("North", 120), ("South", 80.5)]):
        for col, value in enumerate(values):
            sheet.write(row, col, value)
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


def _workbook_bytes(workbook: Workbook) -> bytes:
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def single_sheet_xlsx_bytes() -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Sales"
    sheet.append(["Region", "Amount"])
    sheet.append(["North", 120])
    sheet.append(["South, East", 80])
    return _workbook_bytes(workbook)


@pytest.fixture()
def multi_sheet_xlsx_bytes() -> bytes:
    workbook = Workbook()
    first = workbook.active
    first.title = "Q1"
    first.append(["Month", "Total"])
    first.append(["Jan", 10])
    second = workbook.create_sheet("Q2")
    second.append(["Month", "Total"])
    second.append(["Apr", 20])
    return _workbook_bytes(workbook)
