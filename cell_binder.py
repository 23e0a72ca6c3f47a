"""Assign text elements to the grid cells that own them."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from geometry import get_percentage_of_element_in_cell
from models import Cell, TextElement

logger = logging.getLogger(__name__)

# More than half of an element must lie inside a cell for that cell to own it.
CELL_OWNERSHIP_THRESHOLD = 50


class CellBinder:
    """Bind text elements to cells by area overlap."""

    def __init__(self, ownership_threshold: float = CELL_OWNERSHIP_THRESHOLD):
        """
        Initialize CellBinder.

        Args:
            ownership_threshold: Percentage of an element's area (exclusive) that
                must lie inside a cell for the cell to own the element (0-100)
        """
        if not 0.0 <= ownership_threshold <= 100.0:
            raise ValueError("ownership_threshold must be between 0 and 100")

        self.ownership_threshold = ownership_threshold

    def find_owner(self, element: TextElement, cells: Sequence[Cell]) -> Optional[Cell]:
        """
        Find the first cell, in the given order, that owns the element.

        Returns:
            The owning cell, or None if no cell holds enough of the element
        """
        for cell in cells:
            if get_percentage_of_element_in_cell(element, cell) > self.ownership_threshold:
                return cell
        return None

    def bind(self, elements: Sequence[TextElement], cells: Sequence[Cell]) -> List[TextElement]:
        """
        Append each element to its owning cell.

        Elements without an owner are left unbound; that is not an error.

        Args:
            elements: Text elements in reading order
            cells: Cells in reading order

        Returns:
            The elements that were not bound to any cell
        """
        unbound = []
        for element in elements:
            owner = self.find_owner(element, cells)
            if owner is None:
                unbound.append(element)
                continue
            owner.elements.append(element)

        logger.debug(
            f"Bound {len(elements) - len(unbound)} of {len(elements)} text elements to cells"
        )
        return unbound
