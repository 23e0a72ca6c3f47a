"""Rectangle intersection, area and overlap calculations using Shapely."""

from __future__ import annotations

import functools
from dataclasses import replace
from typing import Callable

from shapely.geometry import box

from models import Rectangle


def _to_polygon(rectangle):
    return box(
        rectangle.x,
        rectangle.y,
        rectangle.x + rectangle.width,
        rectangle.y + rectangle.height,
    )


def intersect(rectangle1, rectangle2) -> Rectangle:
    """
    Construct the rectangle where two rectangles intersect.

    Args:
        rectangle1: Any object with x, y, width and height
        rectangle2: Any object with x, y, width and height

    Returns:
        The intersection, or an empty rectangle at the origin if they do not meet
    """
    intersection = _to_polygon(rectangle1).intersection(_to_polygon(rectangle2))
    if intersection.is_empty:
        return Rectangle(0, 0, 0, 0)
    min_x, min_y, max_x, max_y = intersection.bounds
    return Rectangle(min_x, min_y, max_x - min_x, max_y - min_y)


def get_area(rectangle) -> float:
    return rectangle.width * rectangle.height


def get_percentage_of_element_in_cell(element, cell) -> float:
    """
    Calculate how much of an element lies within a cell, as a percentage.

    For example, if a quarter of the element lies within the cell this returns 25.
    Zero-area elements are 0% inside every cell.

    Args:
        element: Text element (or any rectangle)
        cell: Cell (or any rectangle)

    Returns:
        Percentage in the range 0-100
    """
    element_area = get_area(element)
    if element_area <= 0:
        return 0.0

    intersection_area = get_area(intersect(element, cell))
    return min(100.0, (intersection_area * 100.0) / element_area)


def get_horizontal_overlap_percentage(rectangle1, rectangle2) -> float:
    """
    Calculate the horizontal overlap of two rectangles, ignoring Y.

    0 means no overlap and 100 means the X spans coincide exactly.
    """
    if rectangle1 is None or rectangle2 is None:
        return 0.0

    start_x1 = rectangle1.x
    end_x1 = rectangle1.x + rectangle1.width
    start_x2 = rectangle2.x
    end_x2 = rectangle2.x + rectangle2.width

    if start_x1 >= end_x2 or end_x1 <= start_x2 or rectangle1.width == 0 or rectangle2.width == 0:
        return 0.0

    intersection_width = min(end_x1, end_x2) - max(start_x1, start_x2)
    union_width = max(end_x1, end_x2) - min(start_x1, start_x2)
    return (intersection_width * 100.0) / union_width


def invert_y(rectangle):
    """
    Flip a rectangle from PDF space (Y up) into reading space (Y down).

    Returns a copy of the same type with only ``y`` changed.
    """
    return replace(rectangle, y=-(rectangle.y + rectangle.height))


def reading_order(tolerance: float) -> Callable:
    """
    Build a sort key ordering rectangles top-to-bottom then left-to-right.

    Two rectangles whose Y values differ by less than ``tolerance`` are treated
    as being on the same line and are ordered by X.
    """
    def compare(a, b) -> int:
        if abs(a.y - b.y) < tolerance:
            if a.x > b.x:
                return 1
            if a.x < b.x:
                return -1
            return 0
        return 1 if a.y > b.y else -1

    return functools.cmp_to_key(compare)
