# utils/embeddings/clip_embedder.py

import functools

import cv2
import numpy as np

from .base_embedder import BaseEmbedder


@functools.lru_cache(maxsize=None)
def load_clip(model_name):
    """
    Load (model, processor) once per model name.
    Shared by the image embedder and the zero-shot classifier.
    """
    from transformers import CLIPModel, CLIPProcessor

    model = CLIPModel.from_pretrained(model_name)
    model.eval()
    processor = CLIPProcessor.from_pretrained(model_name)
    return model, processor


def to_pil(frame):
    """BGR numpy frame -> RGB PIL image."""
    from PIL import Image

    return Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))


class ClipEmbedder(BaseEmbedder):
    """
    Whole-image feature print from CLIP's vision tower.
    The vector is returned as produced by the model (not normalized).
    """

    def __init__(self, model_name="openai/clip-vit-base-patch32"):
        self.model_name = model_name
        self.model = None
        self.processor = None

    def prepare(self):
        self.model, self.processor = load_clip(self.model_name)

    def get_embedding(self, image):
        if self.model is None:
            raise RuntimeError("ClipEmbedder not prepared. Call prepare().")

        if image is None:
            return None

        import torch

        inputs = self.processor(images=to_pil(image), return_tensors="pt")
        with torch.no_grad():
            features = self.model.get_image_features(**inputs)

        return np.asarray(features[0].cpu().numpy(), dtype=np.float32)
