# utils/detectors/insight_detector.py

import math
import warnings

import numpy as np

from utils.geometry import clamp_bbox
from .base_detector import BaseDetector

KPS_NAMES = ('left_eye', 'right_eye', 'nose', 'left_mouth', 'right_mouth')


class InsightDetector(BaseDetector):
    """
    Face detector using InsightFace FaceAnalysis (SCRFD + 3D-68 landmarks).
    Normalizes InsightFace output into the project's detection dict format,
    including head pose converted from degrees to radians.

    Parameters
    ----------
    model_name : str
        InsightFace model pack (downloaded to ~/.insightface on first use).
    det_size : tuple(int,int)
        Detection input size (width, height). Larger -> more accurate slower.
    ctx_id : int
        Device id: -1 for CPU, 0 for first GPU (if available).
    min_confidence : float
        Detections scoring below this are dropped.
    """

    def __init__(self, model_name="buffalo_l", det_size=(640, 640), ctx_id=-1,
                 min_confidence=0.5, allowed_modules=None):
        self.model_name = model_name
        self.det_size = tuple(det_size)
        self.ctx_id = ctx_id
        self.min_confidence = min_confidence
        self.allowed_modules = allowed_modules or ['detection', 'landmark_3d_68']
        self.model = None
        self._prepared = False

    def prepare(self):
        """
        Initialize InsightFace FaceAnalysis model. Safe to call multiple times.
        """
        if self._prepared:
            return

        try:
            from insightface.app import FaceAnalysis

            self.model = FaceAnalysis(name=self.model_name, allowed_modules=self.allowed_modules)
            self.model.prepare(ctx_id=self.ctx_id, det_size=self.det_size)
            self._prepared = True
        except Exception as e:
            warnings.warn(
                f"InsightDetector.prepare() failed: {e}. "
                "Make sure insightface is installed and models are reachable."
            )
            raise

    def detect(self, frame):
        if not self._prepared:
            raise RuntimeError("InsightDetector not prepared. Call prepare() first.")

        faces = self.model.get(frame)
        detections = []

        for f in faces:
            score = float(getattr(f, "det_score", 0.0))
            if score < self.min_confidence:
                continue

            bbox = clamp_bbox(np.asarray(f.bbox).astype(int).tolist(), frame.shape)

            kps = {}
            kps_raw = getattr(f, "kps", None)
            if kps_raw is not None and len(kps_raw) >= 5:
                kps = {name: tuple(map(float, kps_raw[i])) for i, name in enumerate(KPS_NAMES)}

            # insightface reports (pitch, yaw, roll) in degrees
            pose = None
            pose_raw = getattr(f, "pose", None)
            if pose_raw is not None and len(pose_raw) == 3:
                pose = tuple(math.radians(float(angle)) for angle in pose_raw)

            detections.append({
                'bbox': bbox,
                'score': score,
                'kps': kps,
                'pose': pose,
            })

        return detections
