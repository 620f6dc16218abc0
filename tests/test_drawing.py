import numpy as np

from utils.drawing import BOX_COLOR, LINE_COLOR, POINT_COLOR, draw


def test_draw_returns_annotated_copy():
    img = np.zeros((100, 100, 3), dtype=np.uint8)
    out = draw(img, boxes=[(10, 10, 50, 50)])

    assert not img.any()
    assert tuple(out[10, 30]) == BOX_COLOR


def test_draw_points_and_lines_use_normalized_coordinates():
    img = np.zeros((100, 200, 3), dtype=np.uint8)
    out = draw(img, points=[(0.5, 0.5)], lines=[((0.0, 0.1), (1.0, 0.1))])

    assert tuple(out[50, 100]) == POINT_COLOR
    assert tuple(out[10, 150]) == LINE_COLOR


def test_draw_nothing_is_identity():
    img = np.full((20, 20, 3), 7, dtype=np.uint8)
    assert np.array_equal(draw(img), img)
