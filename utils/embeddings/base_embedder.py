# utils/embeddings/base_embedder.py

class BaseEmbedder:
    """
    Abstract interface for all embedding models.
    ArcFace (faces) and CLIP (whole images) inherit this.
    """

    def prepare(self):
        """
        Load model weights, initialize runtime, set device.
        Called exactly once.
        """
        raise NotImplementedError

    def get_embedding(self, image):
        """
        image: BGR numpy array (H, W, 3)
        Returns: 1D float32 feature vector or None
        """
        raise NotImplementedError
