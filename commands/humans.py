# commands/humans.py

from utils.drawing import draw
from utils.geometry import normalize_bbox
from utils.image_io import load_image, save_image
from utils.logs import log


class HumanCommand:
    """Detects people: bounding box and confidence of each."""

    def __init__(self, detector, loader=load_image):
        self.detector = detector
        self.loader = loader

    def analyze(self, frame):
        detections = self.detector.detect(frame)
        humans = [
            {
                "boundingBox": normalize_bbox(det["bbox"], frame.shape),
                "confidence": float(det["score"]),
            }
            for det in detections
        ]
        return humans, detections

    def run(self, input, output=None):
        frame = self.loader(input)
        humans, detections = self.analyze(frame)

        if output:
            save_image(output, draw(frame, boxes=[d["bbox"] for d in detections]))
            log(f"Saved bounding boxes to {output}")

        return {"input": input, "humans": humans}
