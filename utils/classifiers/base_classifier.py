# utils/classifiers/base_classifier.py

class BaseClassifier:
    """
    Abstract interface for whole-image classifiers.
    """

    def prepare(self):
        """Load model weights. Called once before `classify`."""
        raise NotImplementedError("prepare() must be implemented by subclasses")

    def classify(self, frame):
        """
        frame: BGR image (H, W, 3)

        Returns: list of {"identifier": str, "confidence": float},
        sorted by confidence, highest first.
        """
        raise NotImplementedError("classify() must be implemented by subclasses")
