# utils/text_recognizer.py

import difflib

import cv2
import numpy as np

from utils.errors import require_model
from utils.geometry import bbox_from_points, clamp_bbox

RECOGNIZER_INPUT = (100, 32)
DB_MEAN = (122.67891434, 116.66876762, 104.00698793)
UNRECOGNIZED = "Failed to recognize text"


def four_points_transform(frame, vertices):
    """
    Warp a text quadrilateral to the recognizer's input size.
    Vertices come from the DB detector as bottom-left, top-left,
    top-right, bottom-right.
    """
    w, h = RECOGNIZER_INPUT
    vertices = np.asarray(vertices, dtype=np.float32).reshape(4, 2)
    target = np.array([[0, h - 1], [0, 0], [w - 1, 0], [w - 1, h - 1]], dtype=np.float32)
    matrix = cv2.getPerspectiveTransform(vertices, target)
    return cv2.warpPerspective(frame, matrix, (w, h))


def correct_words(text, custom_words, cutoff=0.8):
    """
    Snap each whitespace-separated token to the closest custom word,
    case-insensitively, when the match ratio is at least `cutoff`.
    """
    if not custom_words or not text:
        return text

    lookup = {word.lower(): word for word in custom_words}
    corrected = []
    for token in text.split():
        match = difflib.get_close_matches(token.lower(), list(lookup), n=1, cutoff=cutoff)
        corrected.append(lookup[match[0]] if match else token)
    return " ".join(corrected)


class TextRecognizer:
    """
    Scene text detection (DB) + recognition (CRNN, CTC greedy) with OpenCV DNN.

    Model files are the ones used by OpenCV's text_detection sample; the
    vocabulary file holds one symbol per line.
    """

    def __init__(self, detector_model, recognizer_model, vocabulary,
                 input_size=(736, 736), grayscale=False,
                 binary_threshold=0.3, polygon_threshold=0.5):
        self.detector_model = detector_model
        self.recognizer_model = recognizer_model
        self.vocabulary = vocabulary
        self.input_size = tuple(input_size)
        self.grayscale = grayscale
        self.binary_threshold = binary_threshold
        self.polygon_threshold = polygon_threshold
        self.detector = None
        self.recognizer = None

    def prepare(self):
        require_model(self.detector_model, "text detector model")
        require_model(self.recognizer_model, "text recognizer model")
        require_model(self.vocabulary, "text vocabulary")

        with open(self.vocabulary, "r", encoding="utf-8") as f:
            vocab = [line.rstrip("\n") for line in f if line.rstrip("\n")]

        detector = cv2.dnn_TextDetectionModel_DB(self.detector_model)
        detector.setBinaryThreshold(self.binary_threshold)
        detector.setPolygonThreshold(self.polygon_threshold)
        detector.setMaxCandidates(200)
        detector.setUnclipRatio(2.0)
        detector.setInputParams(1.0 / 255.0, self.input_size, DB_MEAN, True)

        recognizer = cv2.dnn_TextRecognitionModel(self.recognizer_model)
        recognizer.setDecodeType("CTC-greedy")
        recognizer.setVocabulary(vocab)
        recognizer.setInputParams(1 / 127.5, RECOGNIZER_INPUT, (127.5, 127.5, 127.5))

        self.detector = detector
        self.recognizer = recognizer

    def recognize(self, frame, custom_words=()):
        """
        Returns a list of {"bbox": (x1, y1, x2, y2), "text": str, "confidence": float}.
        """
        if self.detector is None:
            raise RuntimeError("TextRecognizer not prepared. Call prepare() first.")

        quads, confidences = self.detector.detect(frame)
        source = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY) if self.grayscale else frame

        results = []
        for quad, confidence in zip(quads, np.ravel(confidences)):
            patch = four_points_transform(source, quad)
            text = self.recognizer.recognize(patch).strip()
            text = correct_words(text, custom_words) if text else UNRECOGNIZED
            results.append({
                "bbox": clamp_bbox(bbox_from_points(quad), frame.shape),
                "text": text,
                "confidence": float(confidence),
            })
        return results
