# utils/geometry.py
#
# Boxes are (x1, y1, x2, y2) in pixel space unless stated otherwise.

import numpy as np


def clamp_bbox(bbox, shape):
    """Clamp a box to the image bounds. `shape` is frame.shape."""
    h, w = shape[:2]
    x1, y1, x2, y2 = map(int, bbox)
    x1, y1 = max(0, x1), max(0, y1)
    x2, y2 = min(w, x2), min(h, y2)
    return (x1, y1, x2, y2)


def bbox_area(bbox):
    x1, y1, x2, y2 = bbox
    return max(0, x2 - x1) * max(0, y2 - y1)


def largest_bbox(bboxes):
    """Box with the largest area, or None for an empty list."""
    if not bboxes:
        return None
    return max(bboxes, key=bbox_area)


def bbox_from_xywh(rect):
    x, y, w, h = map(int, rect)
    return (x, y, x + w, y + h)


def bbox_from_points(points):
    """Axis-aligned box around a quadrilateral (or any point set)."""
    pts = np.asarray(points, dtype=np.float32).reshape(-1, 2)
    x1, y1 = np.floor(pts.min(axis=0)).astype(int)
    x2, y2 = np.ceil(pts.max(axis=0)).astype(int)
    return (int(x1), int(y1), int(x2), int(y2))


def crop(frame, bbox):
    """
    Safe crop: the box is clamped first.
    Returns None when nothing is left after clamping.
    """
    x1, y1, x2, y2 = clamp_bbox(bbox, frame.shape)
    region = frame[y1:y2, x1:x2]
    if region.size == 0:
        return None
    return region


def normalize_bbox(bbox, shape):
    """Pixel box -> {"x", "y", "width", "height"} in [0, 1], top-left origin."""
    h, w = shape[:2]
    x1, y1, x2, y2 = clamp_bbox(bbox, shape)
    return {
        "x": x1 / float(w),
        "y": y1 / float(h),
        "width": (x2 - x1) / float(w),
        "height": (y2 - y1) / float(h),
    }


def mask_extent(mask):
    """Tight box around the non-zero pixels of a mask, or None if empty."""
    ys, xs = np.nonzero(mask)
    if len(xs) == 0:
        return None
    return (int(xs.min()), int(ys.min()), int(xs.max()) + 1, int(ys.max()) + 1)
