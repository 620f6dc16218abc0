# commands/nsfw.py

from utils.image_io import load_image


class NsfwCommand:
    """Scores an image with the OpenNSFW classifier."""

    def __init__(self, classifier, loader=load_image):
        self.classifier = classifier
        self.loader = loader

    def run(self, input):
        scores = self.classifier.classify(self.loader(input))
        return {
            "input": input,
            "sfw": float(scores["sfw"]),
            "nsfw": float(scores["nsfw"]),
        }
