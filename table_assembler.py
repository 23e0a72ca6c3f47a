"""Organise bound cells into rows and project them onto the register's columns."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from exceptions import MissingHeaderError, NoGridError
from geometry import get_horizontal_overlap_percentage, reading_order
from models import Cell, Column, TextElement

logger = logging.getLogger(__name__)

# Grid rows are sparser than lines of text, hence the looser tolerance.
CELL_ROW_TOLERANCE = 2
ELEMENT_ROW_TOLERANCE = 1

# A data cell belongs to a column when it overlaps the heading cell by more
# than this percentage horizontally.
HEADER_OVERLAP_THRESHOLD = 90

# Heading labels are compared lowercased with all whitespace removed. Labels
# are tried in order, so later ones are fallbacks.
HEADER_LABELS: Dict[Column, tuple] = {
    Column.APPLICATION_NUMBER: ("d/anumber",),
    Column.RECEIVED_DATE: ("received",),
    Column.LEGAL_DESCRIPTION: ("allotmentor", "allotment/"),
    Column.STREET_NAME: ("streetname",),
    Column.SUBURB_NAME: ("town",),
    Column.DESCRIPTION: ("proposal",),
}

REQUIRED_COLUMNS = (Column.APPLICATION_NUMBER, Column.STREET_NAME, Column.SUBURB_NAME)

Row = List[Cell]

_WHITESPACE = re.compile(r"\s")

cell_order = reading_order(CELL_ROW_TOLERANCE)
element_order = reading_order(ELEMENT_ROW_TOLERANCE)


def sort_cells(cells: Sequence[Cell]) -> List[Cell]:
    return sorted(cells, key=cell_order)


def sort_elements(elements: Sequence[TextElement]) -> List[TextElement]:
    return sorted(elements, key=element_order)


def group_rows(cells: Sequence[Cell]) -> List[Row]:
    """
    Group cells into rows by approximate Y co-ordinate.

    Each cell joins the first row whose first cell is within the row tolerance.
    Rows are returned top to bottom with their cells left to right.
    """
    rows: List[Row] = []
    for cell in cells:
        row = next((row for row in rows if abs(row[0].y - cell.y) < CELL_ROW_TOLERANCE), None)
        if row is None:
            rows.append([cell])
        else:
            row.append(cell)

    rows.sort(key=lambda row: row[0].y)
    for row in rows:
        row.sort(key=lambda cell: cell.x)
    return rows


def normalize_label(text: str) -> str:
    return _WHITESPACE.sub("", text).lower()


def _cell_matches_label(cell: Cell, label: str) -> bool:
    if normalize_label("".join(cell.texts)) == label:
        return True
    # Labels wrapped over several lines appear as separate fragments.
    return any(normalize_label(text) == label for text in cell.texts)


def find_header_cell(cells: Sequence[Cell], column: Column) -> Optional[Cell]:
    for label in HEADER_LABELS[column]:
        for cell in cells:
            if _cell_matches_label(cell, label):
                return cell
    return None


def project_row(row: Row, headers: Dict[Column, Optional[Cell]]) -> Dict[Column, Optional[Cell]]:
    """
    Select the cell in a row that sits under each column heading.

    Columns whose heading is absent, or with no cell overlapping the heading
    enough, map to None.
    """
    projected = {}
    for column, header_cell in headers.items():
        projected[column] = next(
            (
                cell for cell in row
                if get_horizontal_overlap_percentage(cell, header_cell) > HEADER_OVERLAP_THRESHOLD
            ),
            None,
        )
    return projected


@dataclass
class Table:
    """A page's grid organised into rows, with its located column headings."""
    rows: List[Row]
    headers: Dict[Column, Optional[Cell]] = field(default_factory=dict)

    def projected_rows(self) -> Iterator[Dict[Column, Optional[Cell]]]:
        for row in self.rows:
            yield project_row(row, self.headers)


def assemble_table(cells: Sequence[Cell]) -> Table:
    """
    Build a table from cells that already have their text bound.

    Args:
        cells: Bound cells in reading order

    Returns:
        Table with rows and column headings

    Raises:
        NoGridError: If there are no cells at all
        MissingHeaderError: If a required column heading is absent
    """
    rows = group_rows(cells)
    if not rows:
        raise NoGridError("no rows were found (based on the grid)")

    headers = {column: find_header_cell(cells, column) for column in Column}
    for column in REQUIRED_COLUMNS:
        if headers[column] is None:
            raise MissingHeaderError(column)

    missing = [column.title for column, cell in headers.items() if cell is None]
    if missing:
        logger.debug(f"Optional column headings not found: {', '.join(missing)}")

    logger.debug(f"Assembled table with {len(rows)} rows")
    return Table(rows=rows, headers=headers)
