import fitz  # PyMuPDF
import pytest

from address_normalizer import AddressNormalizer
from gazetteer import Gazetteer
from models import Operation, OperatorKind, PathOp, TextRun
from record_builder import RecordBuilder


@pytest.fixture
def gazetteer():
    gazetteer = Gazetteer()
    gazetteer.add_street("SMYTH ROAD", "TOWNSVILLE")
    gazetteer.add_street("MAIN STREET", "TOWNSVILLE")
    gazetteer.add_street("MAIN STREET", "CUMMINS")
    gazetteer.add_street("BAY TERRACE NORTH", "CUMMINS")
    gazetteer.add_street("FLINDERS HIGHWAY", "CUMMINS")
    gazetteer.street_suffixes.update({"ST": "STREET", "RD": "ROAD", "HWY": "HIGHWAY"})
    gazetteer.add_suburb("TOWNSVILLE", "TOWNSVILLE SA 5606")
    gazetteer.add_suburb("CUMMINS", "CUMMINS SA 5631")
    gazetteer.add_suburb("MOUNT DUTTON BAY", "MOUNT DUTTON BAY SA 5607")
    return gazetteer


@pytest.fixture
def normalizer(gazetteer):
    return AddressNormalizer(gazetteer)


@pytest.fixture
def record_builder(normalizer):
    return RecordBuilder(
        normalizer,
        information_url="https://example.com/register.pdf",
        scrape_date="2019-03-01",
    )


@pytest.fixture
def filled_rectangle():
    """Build the operations that draw one filled rectangle."""
    def _filled_rectangle(x, y, width, height):
        return [
            Operation(OperatorKind.CONSTRUCT_PATH, args=(x, y, width, height),
                      path_ops=(PathOp.RECTANGLE,)),
            Operation(OperatorKind.FILL),
        ]
    return _filled_rectangle


@pytest.fixture
def text_run():
    """Build a horizontal text run at a baseline position (PDF space)."""
    def _text_run(text, x, y, width, size=10):
        return TextRun(text=text, transform=(size, 0, 0, size, x, y), width=width)
    return _text_run


@pytest.fixture
def register_page(filled_rectangle, text_run):
    """
    Build a one-page register: a heading row and one application row.

    Columns span x 50-150, 150-300 and 300-450. The heading row spans
    y 680-700 and the data row y 660-680 in PDF space.
    """
    def _register_page(application_number="5/10/21", street="1 MAIN ST", suburb="TOWNSVILLE"):
        operations = []
        for y in (700, 680, 660):
            operations += filled_rectangle(50, y, 400, 1)
        for x in (50, 150, 300, 450):
            operations += filled_rectangle(x, 660, 1, 41)

        text_runs = [
            text_run("D/A Number", 55, 685, 60),
            text_run("Street Name", 155, 685, 80),
            text_run("Town", 305, 685, 30),
        ]
        if application_number:
            text_runs.append(text_run(application_number, 55, 665, 50))
        if street:
            text_runs.append(text_run(street, 155, 665, 60))
        if suburb:
            text_runs.append(text_run(suburb, 305, 665, 60))
        return operations, text_runs
    return _register_page


@pytest.fixture
def register_pdf(tmp_path):
    """Write a one-page register PDF laid out like ``register_page``."""
    page_height = 842
    pdf_path = tmp_path / "register.pdf"
    document = fitz.open()
    page = document.new_page(width=595, height=page_height)
    for y in (700, 680, 660):
        page.draw_rect(fitz.Rect(50, page_height - y - 1, 450, page_height - y), color=None, fill=(0, 0, 0))
    for x in (50, 150, 300, 450):
        page.draw_rect(fitz.Rect(x, page_height - 701, x + 1, page_height - 660), color=None, fill=(0, 0, 0))
    for text, x, y in [
        ("D/A Number", 55, 685), ("Street Name", 155, 685), ("Town", 305, 685),
        ("5/10/21", 55, 665), ("22 SMYTH RD", 155, 665), ("TOWNSVILLE", 305, 665),
    ]:
        page.insert_text((x, page_height - y), text, fontsize=10)
    document.save(pdf_path)
    document.close()
    return pdf_path
