# commands/text.py

from utils.drawing import draw
from utils.geometry import normalize_bbox
from utils.image_io import load_image, save_image
from utils.logs import log


class TextCommand:
    """
    Recognizes text regions: bounding box, top candidate string and
    confidence of each. `custom_words` steer recognition toward known terms.
    """

    def __init__(self, recognizer, loader=load_image):
        self.recognizer = recognizer
        self.loader = loader

    def analyze(self, frame, custom_words=()):
        regions = self.recognizer.recognize(frame, custom_words=list(custom_words))
        text = [
            {
                "boundingBox": normalize_bbox(region["bbox"], frame.shape),
                "text": region["text"],
                "confidence": float(region["confidence"]),
            }
            for region in regions
        ]
        return text, regions

    def run(self, input, output=None, custom_words=()):
        frame = self.loader(input)
        text, regions = self.analyze(frame, custom_words=custom_words)

        if output:
            save_image(output, draw(frame, boxes=[r["bbox"] for r in regions]))
            log(f"Saved bounding boxes to {output}")

        return {
            "input": input,
            "customWords": list(custom_words),
            "text": text,
        }
