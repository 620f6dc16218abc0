import cv2
import numpy as np

from .base_embedder import BaseEmbedder

FACE_SIZE = (112, 112)


class InsightEmbedder(BaseEmbedder):
    """
    ArcFace embedder using the recognition ONNX model of an InsightFace pack.
    Expects an aligned 112x112 face (see FaceAligner).
    Produces 512D L2-normalized embeddings.
    """

    def __init__(self, model_name="buffalo_l", ctx_id=-1):
        self.model_name = model_name
        self.ctx_id = ctx_id
        self.embedder = None

    def prepare(self):
        """Load the ArcFace ONNX model."""
        from insightface.model_zoo import model_zoo

        # For a pack name, model_zoo picks the last .onnx file of the pack,
        # which is the recognition model.
        self.embedder = model_zoo.get_model(self.model_name)
        if self.embedder is None:
            raise RuntimeError(f"Could not load InsightFace model '{self.model_name}'")
        self.embedder.prepare(ctx_id=self.ctx_id)

    def get_embedding(self, aligned_face):
        if self.embedder is None:
            raise RuntimeError("Embedder not prepared. Call prepare().")

        if aligned_face is None:
            return None

        if aligned_face.shape[:2] != FACE_SIZE[::-1]:
            aligned_face = cv2.resize(aligned_face, FACE_SIZE)

        # get_feat takes BGR and swaps channels itself
        emb = np.asarray(self.embedder.get_feat([aligned_face])[0], dtype=np.float32).ravel()

        norm = np.linalg.norm(emb)
        if norm > 0:
            emb = emb / norm

        return emb
