"""Parse development applications from the pages of a register document."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from cell_binder import CellBinder
from exceptions import MissingIdentifier, NoGridError, PDFReadError, RowRejection, StructuralFailure
from geometry import invert_y
from grid_builder import build_cells
from line_extractor import LineExtractor
from models import DevelopmentApplication, Operation, TextElement, TextRun
from record_builder import RecordBuilder
from table_assembler import assemble_table, sort_cells, sort_elements
from text_positioner import position_texts

logger = logging.getLogger(__name__)


def summarize_elements(elements: Sequence[TextElement]) -> str:
    return "".join(f"[{element.text}]" for element in elements)


class RegisterParser:
    """Reconstruct the register table on each page and build its records."""

    def __init__(self, record_builder: RecordBuilder, cell_binder: Optional[CellBinder] = None):
        self.record_builder = record_builder
        self.cell_binder = cell_binder or CellBinder()

    def parse_page(
        self,
        operations: Iterable[Operation],
        text_runs: Iterable[TextRun],
        page_number: int = 0,
    ) -> List[DevelopmentApplication]:
        """
        Parse the development applications on one page.

        A page without a usable grid or without the required headings yields
        no applications; a malformed row is skipped. Neither is raised.

        Args:
            operations: The page's decoded operator stream
            text_runs: The page's decoded text items
            page_number: Page number (0-indexed), for diagnostics

        Returns:
            List of DevelopmentApplication objects, possibly empty
        """
        horizontal_lines, vertical_lines = LineExtractor().extract_lines(operations)
        elements = position_texts(text_runs)

        # PDF co-ordinates are "upside down"; flip them so Y increases down the page.
        cells = [invert_y(cell) for cell in build_cells(horizontal_lines, vertical_lines)]
        elements = [invert_y(element) for element in elements]

        cells = sort_cells(cells)
        elements = sort_elements(elements)

        try:
            if len(horizontal_lines) < 2 or len(vertical_lines) < 2:
                raise NoGridError(
                    f"only {len(horizontal_lines)} horizontal and {len(vertical_lines)} "
                    f"vertical grid lines were found"
                )
            self.cell_binder.bind(elements, cells)
            table = assemble_table(cells)
        except StructuralFailure as e:
            logger.warning(
                f"No development applications can be parsed from page {page_number + 1} "
                f"because {e.reason}. Elements: {summarize_elements(elements)}"
            )
            return []

        applications = []
        for row_cells in table.projected_rows():
            try:
                applications.append(self.record_builder.build(row_cells))
            except MissingIdentifier as e:
                logger.debug(f"Skipping row on page {page_number + 1}: {e.reason}")
            except RowRejection as e:
                logger.warning(f"Ignoring the development application because {e.reason}.")

        logger.info(
            f"Parsed {len(applications)} development application(s) from page {page_number + 1}"
        )
        return applications

    def parse_document(self, pdf_reader, page_numbers: Optional[Sequence[int]] = None) -> List[DevelopmentApplication]:
        """
        Parse every requested page of an opened document.

        A page that cannot be decoded is logged and skipped.

        Args:
            pdf_reader: An opened PDFReader
            page_numbers: Pages to parse (0-indexed); all pages if None

        Returns:
            List of DevelopmentApplication objects from all pages
        """
        total_pages = pdf_reader.get_pdf_metadata()['total_pages']
        if page_numbers is None:
            page_numbers = range(total_pages)

        applications = []
        for page_number in page_numbers:
            if page_number < 0 or page_number >= total_pages:
                logger.warning(f"Page {page_number} is out of range (0-{total_pages - 1}), skipping")
                continue

            logger.info(f"Reading and parsing applications from page {page_number + 1} of {total_pages}.")
            try:
                operations, text_runs = pdf_reader.extract_page(page_number)
            except PDFReadError as e:
                logger.error(f"Skipping page {page_number + 1}: {e}")
                continue

            applications.extend(self.parse_page(operations, text_runs, page_number))

        return applications
