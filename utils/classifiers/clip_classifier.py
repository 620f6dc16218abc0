# utils/classifiers/clip_classifier.py

from utils.embeddings.clip_embedder import load_clip, to_pil
from .base_classifier import BaseClassifier


class ClipClassifier(BaseClassifier):
    """
    Zero-shot image classifier: scores the image against a fixed label set
    using CLIP text prompts. Confidences are a softmax over the label set.
    """

    def __init__(self, labels, model_name="openai/clip-vit-base-patch32", prompt="a photo of {}"):
        if not labels:
            raise ValueError("ClipClassifier needs at least one label")
        self.labels = list(labels)
        self.model_name = model_name
        self.prompt = prompt
        self.model = None
        self.processor = None

    def prepare(self):
        self.model, self.processor = load_clip(self.model_name)

    def classify(self, frame):
        if self.model is None:
            raise RuntimeError("ClipClassifier not prepared. Call prepare() first.")

        import torch

        texts = [self.prompt.format(label) for label in self.labels]
        inputs = self.processor(text=texts, images=to_pil(frame), return_tensors="pt", padding=True)
        with torch.no_grad():
            outputs = self.model(**inputs)
        probs = outputs.logits_per_image.softmax(dim=1)[0].tolist()

        results = [
            {"identifier": label, "confidence": float(p)}
            for label, p in zip(self.labels, probs)
        ]
        results.sort(key=lambda r: r["confidence"], reverse=True)
        return results
