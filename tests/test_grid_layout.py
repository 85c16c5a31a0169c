import math

import pytest

from utils.collage_builder import GridLayout, NoImagesError, auto_columns, compute_grid


@pytest.mark.parametrize(
    "count, columns, rows",
    [
        (1, 1, 1),
        (2, 2, 1),
        (4, 2, 2),
        (5, 3, 2),
        (9, 3, 3),
        (10, 4, 3),
    ],
)
def test_auto_grid_dimensions(count, columns, rows):
    layout = compute_grid([600] * count)
    assert (layout.columns, layout.rows) == (columns, rows)


def test_auto_columns_matches_ceil_sqrt():
    for count in range(1, 200):
        assert auto_columns(count) == math.ceil(math.sqrt(count))


def test_explicit_columns():
    layout = compute_grid([600] * 5, images_per_row=2)
    assert (layout.columns, layout.rows) == (2, 3)

    wide = compute_grid([600] * 2, images_per_row=4)
    assert (wide.columns, wide.rows) == (4, 1)


def test_canvas_size_formula():
    for count in range(1, 20):
        widths = [300 + 10 * i for i in range(count)]
        layout = compute_grid(widths)
        assert layout.cell_width == max(widths)
        assert layout.canvas_width == max(widths) * layout.columns + 10 * (layout.columns + 1)
        assert layout.canvas_height == 600 * layout.rows + 10 * (layout.rows + 1)


def test_cell_origin_is_order_stable():
    layout = GridLayout(count=7, columns=3, rows=3, cell_width=800)
    assert layout.cell_origin(0) == (10, 10)
    assert layout.cell_origin(2) == (2 * 800 + 30, 10)
    assert layout.cell_position(4) == (1, 1)
    assert layout.cell_origin(4) == (820, 620)
    assert layout.cell_origin(6) == (10, 2 * 600 + 30)
    with pytest.raises(IndexError):
        layout.cell_origin(7)


def test_cells_do_not_overlap():
    layout = compute_grid([400, 1200, 800, 50, 600])
    boxes = []
    for idx in range(layout.count):
        x, y = layout.cell_origin(idx)
        boxes.append((x, y, x + layout.cell_width, y + layout.cell_height))
    for i, a in enumerate(boxes):
        assert a[2] <= layout.canvas_width and a[3] <= layout.canvas_height
        for b in boxes[i + 1:]:
            assert a[2] <= b[0] or b[2] <= a[0] or a[3] <= b[1] or b[3] <= a[1]


def test_invalid_inputs_raise():
    with pytest.raises(NoImagesError):
        compute_grid([])
    for bad in (0, -1, 2.5, True, "3"):
        with pytest.raises(ValueError):
            compute_grid([600], images_per_row=bad)


def test_to_dict_includes_canvas():
    data = compute_grid([600, 300]).to_dict()
    assert data["columns"] == 2
    assert data["canvas_width"] == 2 * 600 + 30
    assert data["canvas_height"] == 620
