# utils/drawing.py

import cv2

BOX_COLOR = (0, 0, 255)      # Red
POINT_COLOR = (0, 255, 0)    # Green
LINE_COLOR = (255, 255, 0)   # Cyan


def _to_pixel(point, shape):
    """Normalized (x, y) -> integer pixel coordinates."""
    h, w = shape[:2]
    return (int(round(point[0] * w)), int(round(point[1] * h)))


def draw(image, points=(), boxes=(), lines=(), thickness=2):
    """
    Annotate a copy of `image`.

    points: normalized (x, y) pairs
    boxes: pixel boxes (x1, y1, x2, y2)
    lines: pairs of normalized points
    """
    canvas = image.copy()
    shape = canvas.shape

    for x1, y1, x2, y2 in boxes:
        cv2.rectangle(canvas, (int(x1), int(y1)), (int(x2), int(y2)), BOX_COLOR, thickness)

    for start, end in lines:
        cv2.line(canvas, _to_pixel(start, shape), _to_pixel(end, shape), LINE_COLOR, thickness)

    radius = max(2, thickness * 2)
    for point in points:
        cv2.circle(canvas, _to_pixel(point, shape), radius, POINT_COLOR, -1)

    return canvas
