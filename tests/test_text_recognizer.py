import numpy as np
import pytest

from utils.errors import ModelUnavailableError
from utils.text_recognizer import (
    UNRECOGNIZED,
    TextRecognizer,
    correct_words,
    four_points_transform,
)


def test_correct_words_snaps_close_tokens():
    assert correct_words("helo wrld", ["Hello", "World"]) == "Hello World"


def test_correct_words_leaves_unrelated_tokens():
    assert correct_words("invoice 2024", ["Hello"]) == "invoice 2024"


def test_correct_words_without_custom_words():
    assert correct_words("helo", []) == "helo"
    assert correct_words("", ["Hello"]) == ""


def test_four_points_transform_output_size(frame):
    quad = [[50, 80], [50, 20], [150, 20], [150, 80]]
    patch = four_points_transform(frame, quad)
    assert patch.shape == (32, 100, 3)
    # the quad covers the orange block only
    assert tuple(patch[16, 50]) == (0, 128, 255)


def test_prepare_without_models(tmp_path):
    recognizer = TextRecognizer(
        detector_model=str(tmp_path / "db.onnx"),
        recognizer_model=str(tmp_path / "crnn.onnx"),
        vocabulary=str(tmp_path / "alphabet.txt"),
    )
    with pytest.raises(ModelUnavailableError, match="text detector model"):
        recognizer.prepare()


def test_recognize_requires_prepare(frame):
    recognizer = TextRecognizer(None, None, None)
    with pytest.raises(RuntimeError):
        recognizer.recognize(frame)


class FakeDetector:
    def detect(self, frame):
        quads = [
            np.array([[50, 80], [50, 20], [150, 20], [150, 80]]),
            np.array([[0, 10], [0, 0], [20, 0], [20, 10]]),
        ]
        return quads, [0.9, 0.4]


class FakeRecognizer:
    def __init__(self, outputs):
        self.outputs = list(outputs)

    def recognize(self, patch):
        assert patch.shape[:2] == (32, 100)
        return self.outputs.pop(0)


def test_recognize_builds_regions(frame):
    recognizer = TextRecognizer(None, None, None)
    recognizer.detector = FakeDetector()
    recognizer.recognizer = FakeRecognizer(["helo ", ""])

    regions = recognizer.recognize(frame, custom_words=["Hello"])

    assert regions == [
        {"bbox": (50, 20, 150, 80), "text": "Hello", "confidence": pytest.approx(0.9)},
        {"bbox": (0, 0, 20, 10), "text": UNRECOGNIZED, "confidence": pytest.approx(0.4)},
    ]
