# utils/classifiers/nsfw_classifier.py

import cv2
import numpy as np

from utils.errors import require_model

# Caffe-style BGR channel means used to train OpenNSFW
NSFW_MEAN_BGR = np.array([104.0, 117.0, 123.0], dtype=np.float32)
RESIZE_TO = 256
CROP_TO = 224


def preprocess(frame, channels_first=False):
    """
    Resize to 256x256, center-crop 224x224, subtract the BGR means.
    Returns a float32 batch of one: NHWC by default, NCHW if channels_first.
    """
    resized = cv2.resize(frame, (RESIZE_TO, RESIZE_TO), interpolation=cv2.INTER_LINEAR)
    off = (RESIZE_TO - CROP_TO) // 2
    patch = resized[off:off + CROP_TO, off:off + CROP_TO].astype(np.float32)
    patch -= NSFW_MEAN_BGR

    if channels_first:
        patch = patch.transpose(2, 0, 1)
    return patch[np.newaxis, ...]


class NsfwClassifier:
    """
    Yahoo OpenNSFW model exported to ONNX, run with onnxruntime.
    The model outputs [sfw, nsfw] probabilities.
    """

    def __init__(self, model_path):
        self.model_path = model_path
        self.session = None
        self.input_name = None
        self.channels_first = False

    def prepare(self):
        require_model(self.model_path, "NSFW model")

        import onnxruntime as ort

        self.session = ort.InferenceSession(self.model_path, providers=["CPUExecutionProvider"])
        model_input = self.session.get_inputs()[0]
        self.input_name = model_input.name
        shape = model_input.shape
        self.channels_first = len(shape) == 4 and shape[1] == 3

    def classify(self, frame):
        if self.session is None:
            raise RuntimeError("NsfwClassifier not prepared. Call prepare() first.")

        batch = preprocess(frame, channels_first=self.channels_first)
        probs = np.asarray(self.session.run(None, {self.input_name: batch})[0]).ravel()
        if probs.size < 2:
            raise RuntimeError(f"Unexpected NSFW model output size: {probs.size}")

        return {"sfw": float(probs[0]), "nsfw": float(probs[1])}
