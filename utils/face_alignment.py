# utils/face_alignment.py

import numpy as np
import cv2

from utils.geometry import crop
from utils.logs import log

# Standard 5-point template for ArcFace alignment (112x112)
ARC_TEMPLATE_5PT = np.array([
    [38.2946, 51.6963],  # left eye
    [73.5318, 51.5014],  # right eye
    [56.0252, 71.7366],  # nose
    [41.5493, 92.3655],  # left mouth
    [70.7299, 92.2041]   # right mouth
], dtype=np.float32)

KPS_ORDER = ("left_eye", "right_eye", "nose", "left_mouth", "right_mouth")


class FaceAligner:
    """
    Warps a face onto the ArcFace template using its 5 keypoints.
    Falls back to a plain bbox crop when keypoints are missing.
    """

    def __init__(self, output_size=(112, 112)):
        self.output_size = tuple(output_size)
        scale = np.array([self.output_size[0] / 112.0, self.output_size[1] / 112.0], dtype=np.float32)
        self.template = ARC_TEMPLATE_5PT * scale

    def align(self, frame, kps, bbox=None):
        """
        frame: original frame (BGR)
        kps: dict with 5 keys: 'left_eye', 'right_eye', 'nose', 'left_mouth', 'right_mouth'
        bbox: optional (x1, y1, x2, y2) used when kps are unusable

        Returns: aligned BGR face crop of output_size, or None
        """
        if not kps or any(name not in kps for name in KPS_ORDER):
            return self._crop_fallback(frame, bbox)

        src = np.array([kps[name] for name in KPS_ORDER], dtype=np.float32)

        transform_matrix, _ = cv2.estimateAffinePartial2D(src, self.template, method=cv2.LMEDS)
        if transform_matrix is None:
            log("Similarity transform failed, using bbox crop", tag="WARN")
            return self._crop_fallback(frame, bbox)

        return cv2.warpAffine(frame, transform_matrix, self.output_size, borderValue=0.0)

    def _crop_fallback(self, frame, bbox):
        if bbox is None:
            return None
        region = crop(frame, bbox)
        if region is None:
            return None
        return cv2.resize(region, self.output_size)
