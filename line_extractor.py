"""Extract table grid lines from a page's drawing operator stream."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import fitz  # PyMuPDF

from models import LineOrientation, Operation, OperatorKind, PathOp, Rectangle

logger = logging.getLogger(__name__)

# Grid lines are drawn as thin filled rectangles. Short strokes (eg. a logo)
# are rejected so that they do not fracture the grid into extra cells.
MAX_LINE_THICKNESS = 2
MIN_HORIZONTAL_LINE_WIDTH = 200
MIN_VERTICAL_LINE_HEIGHT = 10

FILL_OPERATORS = (OperatorKind.FILL, OperatorKind.EO_FILL)


def classify_line(rectangle: Rectangle) -> LineOrientation:
    """Classify a rectangle as a horizontal line, a vertical line or neither."""
    if rectangle.height <= MAX_LINE_THICKNESS and rectangle.width >= MIN_HORIZONTAL_LINE_WIDTH:
        return LineOrientation.HORIZONTAL
    if rectangle.width <= MAX_LINE_THICKNESS and rectangle.height >= MIN_VERTICAL_LINE_HEIGHT:
        return LineOrientation.VERTICAL
    return LineOrientation.UNCLASSIFIED


class LineExtractor:
    """Walk an operator stream with a transform stack and collect filled rectangles."""

    def __init__(self):
        self.transform = fitz.Matrix(1, 0, 0, 1, 0, 0)
        self.transform_stack: List[fitz.Matrix] = []

    def _transform_rectangle(self, x: float, y: float, width: float, height: float) -> Rectangle:
        # Both corners are transformed so that rotation and scaling are honoured.
        corner1 = fitz.Point(x, y) * self.transform
        corner2 = fitz.Point(x + width, y + height) * self.transform
        return Rectangle(
            x=min(corner1.x, corner2.x),
            y=min(corner1.y, corner2.y),
            width=abs(corner2.x - corner1.x),
            height=abs(corner2.y - corner1.y),
        )

    def _construct_path(self, operation: Operation, pending: Optional[Rectangle]) -> Optional[Rectangle]:
        args = operation.args
        argument_index = 0
        for path_op in operation.path_ops:
            if path_op is PathOp.RECTANGLE:
                x, y, width, height = args[argument_index:argument_index + 4]
                pending = self._transform_rectangle(x, y, width, height)
            argument_index += path_op.argument_count
        return pending

    def extract_rectangles(self, operations: Iterable[Operation]) -> List[Rectangle]:
        """
        Collect every rectangle that is filled.

        Only the last rectangle constructed before a fill is committed; any
        rectangle replaced by a later one before a fill is discarded.

        Args:
            operations: Decoded operator stream for one page

        Returns:
            List of rectangles in page coordinates (PDF space)
        """
        self.transform = fitz.Matrix(1, 0, 0, 1, 0, 0)
        self.transform_stack = []
        rectangles = []
        pending: Optional[Rectangle] = None

        for operation in operations:
            if operation.kind is OperatorKind.SAVE:
                self.transform_stack.append(self.transform)
            elif operation.kind is OperatorKind.RESTORE:
                if self.transform_stack:
                    self.transform = self.transform_stack.pop()
                else:
                    logger.debug("Unbalanced restore in operator stream, resetting transform")
                    self.transform = fitz.Matrix(1, 0, 0, 1, 0, 0)
            elif operation.kind is OperatorKind.TRANSFORM:
                self.transform = fitz.Matrix(*operation.args) * self.transform
            elif operation.kind is OperatorKind.CONSTRUCT_PATH:
                pending = self._construct_path(operation, pending)
            elif operation.kind in FILL_OPERATORS and pending is not None:
                rectangles.append(pending)
                pending = None

        logger.debug(f"Found {len(rectangles)} filled rectangles")
        return rectangles

    def extract_lines(self, operations: Iterable[Operation]) -> Tuple[List[Rectangle], List[Rectangle]]:
        """
        Find the horizontal and vertical lines that make up a table grid.

        Returns:
            Tuple of (horizontal_lines, vertical_lines), unsorted
        """
        horizontal_lines = []
        vertical_lines = []
        for rectangle in self.extract_rectangles(operations):
            orientation = classify_line(rectangle)
            if orientation is LineOrientation.HORIZONTAL:
                horizontal_lines.append(rectangle)
            elif orientation is LineOrientation.VERTICAL:
                vertical_lines.append(rectangle)

        logger.debug(
            f"Classified {len(horizontal_lines)} horizontal and "
            f"{len(vertical_lines)} vertical lines"
        )
        return horizontal_lines, vertical_lines
