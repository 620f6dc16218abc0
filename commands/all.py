# commands/all.py

from utils.image_io import load_image


class AllCommand:
    """
    Runs every analysis on one image and merges the results:
    faces (with embeddings), humans, text, poses, classifications and the
    whole-image embedding. A command passed as None is left out of the output.
    """

    def __init__(self, faces=None, humans=None, text=None, poses=None,
                 classify=None, embeddings=None, minimum_confidence=0.4,
                 loader=load_image):
        self.faces = faces
        self.humans = humans
        self.text = text
        self.poses = poses
        self.classify = classify
        self.embeddings = embeddings
        self.minimum_confidence = minimum_confidence
        self.loader = loader

    def run(self, input):
        frame = self.loader(input)
        result = {"input": input}

        if self.faces is not None:
            with_embeddings = self.faces.embedder is not None and self.faces.aligner is not None
            result["faces"], _ = self.faces.analyze(frame, embeddings=with_embeddings)

        if self.humans is not None:
            result["humans"], _ = self.humans.analyze(frame)

        if self.text is not None:
            result["text"], _ = self.text.analyze(frame)

        if self.poses is not None:
            result["poses"] = self.poses.analyze(frame)

        if self.classify is not None:
            result["classifications"] = self.classify.analyze(
                frame, minimum_confidence=self.minimum_confidence
            )

        if self.embeddings is not None:
            result["embedding"] = self.embeddings.embed(frame)

        return result
