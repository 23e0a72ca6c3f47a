import pytest

from grid_builder import build_cells
from models import Cell, Rectangle


def horizontal(y):
    return Rectangle(0, y, 400, 1)


def vertical(x):
    return Rectangle(x, 0, 1, 100)


@pytest.mark.parametrize("h, v", [(2, 2), (3, 3), (5, 4), (2, 7)])
def test_cell_count_is_product_of_gaps(h, v):
    cells = build_cells([horizontal(y * 20) for y in range(h)], [vertical(x * 50) for x in range(v)])
    assert len(cells) == (h - 1) * (v - 1)


@pytest.mark.parametrize("h, v", [(0, 0), (1, 5), (5, 1), (0, 3)])
def test_too_few_lines_build_no_cells(h, v):
    cells = build_cells([horizontal(y * 20) for y in range(h)], [vertical(x * 50) for x in range(v)])
    assert cells == []


def test_cells_span_adjacent_lines_regardless_of_input_order():
    cells = build_cells(
        [horizontal(30), horizontal(0), horizontal(10)],
        [vertical(100), vertical(0)],
    )
    assert cells == [
        Cell(x=0, y=0, width=100, height=10),
        Cell(x=0, y=10, width=100, height=20),
    ]


def test_cells_start_empty():
    cells = build_cells([horizontal(0), horizontal(10)], [vertical(0), vertical(10)])
    assert cells[0].elements == []
