# commands/distance.py

from utils.similarity import cosine_distance


class DistanceCommand:
    """
    Embeds two images and reports their cosine distance (1 - similarity).
    """

    def __init__(self, embedding_command):
        self.embedding_command = embedding_command

    def run(self, a, b):
        first = self.embedding_command.run(a)["embedding"]
        second = self.embedding_command.run(b)["embedding"]
        return {
            "A": a,
            "B": b,
            "distance": cosine_distance(first, second),
        }
