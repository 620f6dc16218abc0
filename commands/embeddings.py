# commands/embeddings.py

from utils.image_io import load_image


class EmbeddingCommand:
    """Extracts the feature-print embedding of a whole image."""

    def __init__(self, embedder, loader=load_image):
        self.embedder = embedder
        self.loader = loader

    def embed(self, frame):
        embedding = self.embedder.get_embedding(frame)
        if embedding is None:
            raise RuntimeError("Embedder returned no embedding")
        return [float(v) for v in embedding]

    def run(self, input):
        return {"input": input, "embedding": self.embed(self.loader(input))}
