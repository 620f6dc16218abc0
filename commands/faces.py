# commands/faces.py

from utils.drawing import draw
from utils.errors import NoSubjectFoundError
from utils.geometry import crop, largest_bbox, normalize_bbox
from utils.image_io import load_image, save_image
from utils.logs import log


class FaceCommand:
    """
    Detects faces and reports roll / yaw / pitch, bounding box and confidence
    of each one. Optionally attaches an embedding per face, saves the largest
    face crop, or saves the image with all face boxes drawn.
    """

    def __init__(self, detector, aligner=None, embedder=None, loader=load_image):
        self.detector = detector
        self.aligner = aligner
        self.embedder = embedder
        self.loader = loader

    def _embed(self, frame, det):
        try:
            aligned = self.aligner.align(frame, det.get("kps"), bbox=det["bbox"])
            embedding = self.embedder.get_embedding(aligned)
        except Exception as e:
            log(f"Embedding failed for face at {det['bbox']}: {e}", tag="SKIP")
            return None
        if embedding is None:
            return None
        return [float(v) for v in embedding]

    def analyze(self, frame, embeddings=False):
        """Returns (faces_json, detections)."""
        if embeddings and (self.aligner is None or self.embedder is None):
            raise RuntimeError("Face embeddings need an aligner and an embedder")

        detections = self.detector.detect(frame)
        faces = []
        for det in detections:
            pitch, yaw, roll = det.get("pose") or (0.0, 0.0, 0.0)
            face = {
                "roll": float(roll),
                "yaw": float(yaw),
                "pitch": float(pitch),
                "boundingBox": normalize_bbox(det["bbox"], frame.shape),
                "confidence": float(det["score"]),
            }
            if embeddings:
                embedding = self._embed(frame, det)
                if embedding is not None:
                    face["embedding"] = embedding
            faces.append(face)
        return faces, detections

    def run(self, input, output=None, cropped=False, embeddings=False):
        if cropped and not output:
            raise ValueError("--cropped requires an output path")

        frame = self.loader(input)
        faces, detections = self.analyze(frame, embeddings=embeddings)
        result = {"input": input, "faces": faces}

        if cropped:
            largest = largest_bbox([d["bbox"] for d in detections])
            face_crop = crop(frame, largest) if largest is not None else None
            if face_crop is None:
                raise NoSubjectFoundError("No face found to crop", result=result)
            save_image(output, face_crop)
            log(f"Saved cropped image to {output}")
        elif output:
            save_image(output, draw(frame, boxes=[d["bbox"] for d in detections]))
            log(f"Saved bounding boxes to {output}")

        return result
