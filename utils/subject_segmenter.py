# utils/subject_segmenter.py

import cv2
import numpy as np

from utils.errors import NoSubjectFoundError
from utils.geometry import mask_extent


def apply_mask(frame, mask, cropped=False):
    """
    BGR frame + binary mask -> BGRA image whose alpha is the mask.
    With `cropped`, the result is cut down to the mask's extent.
    """
    extent = mask_extent(mask)
    if extent is None:
        raise NoSubjectFoundError()

    bgra = cv2.cvtColor(frame, cv2.COLOR_BGR2BGRA)
    bgra[:, :, 3] = np.where(mask > 0, 255, 0).astype(np.uint8)

    if cropped:
        x1, y1, x2, y2 = extent
        bgra = bgra[y1:y2, x1:x2]
    return bgra


class SubjectSegmenter:
    """
    Foreground extraction with OpenCV GrabCut, seeded by a rectangle that
    leaves a `margin` (fraction of each side) of assumed background.
    """

    def __init__(self, iterations=5, margin=0.05):
        self.iterations = iterations
        self.margin = margin

    def prepare(self):
        pass

    def segment(self, frame):
        """Returns a uint8 mask (255 = subject, 0 = background)."""
        h, w = frame.shape[:2]
        mx = max(1, int(w * self.margin))
        my = max(1, int(h * self.margin))
        if w - 2 * mx < 1 or h - 2 * my < 1:
            raise NoSubjectFoundError(f"Image too small to segment ({w}x{h})")

        mask = np.zeros((h, w), np.uint8)
        bgd_model = np.zeros((1, 65), np.float64)
        fgd_model = np.zeros((1, 65), np.float64)
        rect = (mx, my, w - 2 * mx, h - 2 * my)

        cv2.grabCut(frame, mask, rect, bgd_model, fgd_model, self.iterations, cv2.GC_INIT_WITH_RECT)

        foreground = (mask == cv2.GC_FGD) | (mask == cv2.GC_PR_FGD)
        return np.where(foreground, 255, 0).astype(np.uint8)

    def extract(self, frame, cropped=False):
        return apply_mask(frame, self.segment(frame), cropped=cropped)
