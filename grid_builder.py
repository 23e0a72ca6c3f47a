"""Build table cells from the gaps between adjacent grid lines."""

from __future__ import annotations

import logging
from typing import List, Sequence

from models import Cell, Rectangle

logger = logging.getLogger(__name__)


def build_cells(horizontal_lines: Sequence[Rectangle], vertical_lines: Sequence[Rectangle]) -> List[Cell]:
    """
    Construct one cell per pair of adjacent horizontal and adjacent vertical lines.

    Produces (H - 1) x (V - 1) cells, or none when either set has fewer than
    two lines.

    Args:
        horizontal_lines: Horizontal grid lines in any order
        vertical_lines: Vertical grid lines in any order

    Returns:
        List of empty cells, ordered by horizontal gap then vertical gap
    """
    horizontal_lines = sorted(horizontal_lines, key=lambda line: line.y)
    vertical_lines = sorted(vertical_lines, key=lambda line: line.x)

    cells = []
    for line, next_line in zip(horizontal_lines, horizontal_lines[1:]):
        for column_line, next_column_line in zip(vertical_lines, vertical_lines[1:]):
            cells.append(Cell(
                x=column_line.x,
                y=line.y,
                width=next_column_line.x - column_line.x,
                height=next_line.y - line.y,
            ))

    logger.debug(
        f"Built {len(cells)} cells from {len(horizontal_lines)} horizontal and "
        f"{len(vertical_lines)} vertical lines"
    )
    return cells
