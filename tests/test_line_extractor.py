import pytest

from line_extractor import LineExtractor, classify_line
from models import LineOrientation, Operation, OperatorKind, PathOp, Rectangle


def transform(*args):
    return Operation(OperatorKind.TRANSFORM, args=args)


SAVE = Operation(OperatorKind.SAVE)
RESTORE = Operation(OperatorKind.RESTORE)
FILL = Operation(OperatorKind.FILL)


@pytest.mark.parametrize("rectangle, expected", [
    (Rectangle(0, 0, 200, 2), LineOrientation.HORIZONTAL),
    (Rectangle(0, 0, 500, 0.5), LineOrientation.HORIZONTAL),
    (Rectangle(0, 0, 2, 10), LineOrientation.VERTICAL),
    (Rectangle(0, 0, 1, 300), LineOrientation.VERTICAL),
    (Rectangle(0, 0, 199, 1), LineOrientation.UNCLASSIFIED),
    (Rectangle(0, 0, 1, 9), LineOrientation.UNCLASSIFIED),
    (Rectangle(0, 0, 50, 50), LineOrientation.UNCLASSIFIED),
])
def test_classify_line(rectangle, expected):
    assert classify_line(rectangle) is expected


def test_filled_rectangles_are_collected(filled_rectangle):
    operations = filled_rectangle(10, 20, 300, 1) + filled_rectangle(10, 20, 1, 50)
    assert LineExtractor().extract_rectangles(operations) == [
        Rectangle(10, 20, 300, 1),
        Rectangle(10, 20, 1, 50),
    ]


def test_only_last_rectangle_before_fill_is_committed():
    operations = [
        Operation(OperatorKind.CONSTRUCT_PATH, args=(0, 0, 300, 1), path_ops=(PathOp.RECTANGLE,)),
        Operation(OperatorKind.CONSTRUCT_PATH, args=(0, 50, 300, 1), path_ops=(PathOp.RECTANGLE,)),
        FILL,
        FILL,
    ]
    assert LineExtractor().extract_rectangles(operations) == [Rectangle(0, 50, 300, 1)]


def test_unfilled_rectangle_is_discarded():
    operations = [
        Operation(OperatorKind.CONSTRUCT_PATH, args=(0, 0, 300, 1), path_ops=(PathOp.RECTANGLE,)),
    ]
    assert LineExtractor().extract_rectangles(operations) == []


def test_path_arguments_are_consumed_per_sub_operation():
    operations = [
        Operation(
            OperatorKind.CONSTRUCT_PATH,
            args=(1, 2, 3, 4, 9, 9, 9, 9, 9, 9, 5, 6, 300, 1),
            path_ops=(PathOp.MOVE_TO, PathOp.LINE_TO, PathOp.CURVE_TO,
                      PathOp.CLOSE_PATH, PathOp.RECTANGLE),
        ),
        Operation(OperatorKind.EO_FILL),
    ]
    assert LineExtractor().extract_rectangles(operations) == [Rectangle(5, 6, 300, 1)]


def test_transforms_compose_with_the_current_transform(filled_rectangle):
    operations = [transform(2, 0, 0, 2, 0, 0), transform(1, 0, 0, 1, 10, 0)]
    operations += filled_rectangle(0, 0, 150, 1)
    assert LineExtractor().extract_rectangles(operations) == [Rectangle(20, 0, 300, 2)]


def test_restore_returns_to_saved_transform(filled_rectangle):
    operations = [SAVE, transform(1, 0, 0, 1, 100, 0), RESTORE]
    operations += filled_rectangle(0, 0, 300, 1)
    assert LineExtractor().extract_rectangles(operations) == [Rectangle(0, 0, 300, 1)]


def test_transform_applies_inside_save_block(filled_rectangle):
    operations = [SAVE, transform(1, 0, 0, 1, 100, 0)]
    operations += filled_rectangle(0, 0, 300, 1)
    operations += [RESTORE]
    operations += filled_rectangle(0, 0, 300, 1)
    rectangles = LineExtractor().extract_rectangles(operations)
    assert [rectangle.x for rectangle in rectangles] == [100, 0]


def test_unbalanced_restore_resets_to_identity(filled_rectangle):
    operations = [transform(1, 0, 0, 1, 100, 0), RESTORE]
    operations += filled_rectangle(0, 0, 300, 1)
    assert LineExtractor().extract_rectangles(operations)[0].x == 0


def test_rotation_turns_a_horizontal_rectangle_vertical(filled_rectangle):
    operations = [transform(0, 1, -1, 0, 0, 0)] + filled_rectangle(0, 0, 300, 1)
    (rectangle,) = LineExtractor().extract_rectangles(operations)
    assert rectangle.x == pytest.approx(-1)
    assert rectangle.y == pytest.approx(0)
    assert rectangle.width == pytest.approx(1)
    assert rectangle.height == pytest.approx(300)
    assert classify_line(rectangle) is LineOrientation.VERTICAL


def test_flipped_transform_yields_non_negative_size(filled_rectangle):
    operations = [transform(1, 0, 0, -1, 0, 792)] + filled_rectangle(50, 92, 400, 1)
    (rectangle,) = LineExtractor().extract_rectangles(operations)
    assert rectangle == Rectangle(50, 699, 400, 1)


def test_extract_lines_ignores_short_strokes(filled_rectangle):
    operations = (
        filled_rectangle(0, 0, 400, 1)
        + filled_rectangle(0, 0, 1, 40)
        + filled_rectangle(500, 500, 20, 1)
        + filled_rectangle(500, 500, 1, 5)
    )
    horizontal_lines, vertical_lines = LineExtractor().extract_lines(operations)
    assert horizontal_lines == [Rectangle(0, 0, 400, 1)]
    assert vertical_lines == [Rectangle(0, 0, 1, 40)]
