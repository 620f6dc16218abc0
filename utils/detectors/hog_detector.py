# utils/detectors/hog_detector.py

import math

import cv2
import numpy as np

from utils.geometry import bbox_from_xywh, clamp_bbox
from .base_detector import BaseDetector


class HogPeopleDetector(BaseDetector):
    """
    Full-body human detector using OpenCV's HOG + linear SVM people model.
    The SVM margin is squashed through a logistic so confidences land in (0, 1).
    """

    def __init__(self, win_stride=(8, 8), padding=(8, 8), scale=1.05):
        self.win_stride = tuple(win_stride)
        self.padding = tuple(padding)
        self.scale = scale
        self.hog = None

    def prepare(self):
        if self.hog is not None:
            return
        self.hog = cv2.HOGDescriptor()
        self.hog.setSVMDetector(cv2.HOGDescriptor_getDefaultPeopleDetector())

    def detect(self, frame):
        if self.hog is None:
            raise RuntimeError("HogPeopleDetector not prepared. Call prepare() first.")

        rects, weights = self.hog.detectMultiScale(
            frame,
            winStride=self.win_stride,
            padding=self.padding,
            scale=self.scale,
        )
        weights = np.ravel(weights) if len(rects) else []

        detections = []
        for rect, weight in zip(rects, weights):
            detections.append({
                'bbox': clamp_bbox(bbox_from_xywh(rect), frame.shape),
                'score': 1.0 / (1.0 + math.exp(-float(weight))),
            })
        return detections
