import pytest

from cell_binder import CellBinder
from models import Cell, TextElement


@pytest.fixture
def cells():
    return [Cell(0, 0, 100, 20), Cell(100, 0, 100, 20), Cell(0, 20, 100, 20)]


def test_element_is_bound_to_cell_holding_most_of_it(cells):
    element = TextElement("5/10/21", 85, 2, 40, 10)
    CellBinder().bind([element], cells)
    assert cells[0].elements == []
    assert cells[1].elements == [element]


def test_element_without_majority_owner_is_dropped(cells):
    # Exactly half in each of two cells: neither exceeds 50%.
    element = TextElement("split", 90, 2, 20, 10)
    unbound = CellBinder().bind([element], cells)
    assert unbound == [element]
    assert all(cell.elements == [] for cell in cells)


def test_elements_are_appended_in_given_order(cells):
    first = TextElement("1 MAIN", 5, 2, 30, 8)
    second = TextElement("ST", 40, 2, 10, 8)
    CellBinder().bind([first, second], cells)
    assert cells[0].texts == ["1 MAIN", "ST"]


def test_first_owning_cell_wins():
    overlapping = [Cell(0, 0, 100, 100), Cell(0, 0, 100, 100)]
    element = TextElement("x", 10, 10, 10, 10)
    CellBinder().bind([element], overlapping)
    assert overlapping[0].elements == [element]
    assert overlapping[1].elements == []


def test_zero_area_element_is_never_bound(cells):
    element = TextElement("", 10, 2, 0, 10)
    assert CellBinder().bind([element], cells) == [element]


def test_threshold_must_be_a_percentage():
    with pytest.raises(ValueError):
        CellBinder(ownership_threshold=150)
