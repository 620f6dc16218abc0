# commands/classify.py

from utils.image_io import load_image


def filter_classifications(classifications, minimum_confidence=0.4, include_identifiers=()):
    """
    Keep entries at or above `minimum_confidence`, then append every
    identifier from `include_identifiers` that was filtered out, with its
    raw confidence (0 if the classifier never produced it).
    """
    kept = [c for c in classifications if c["confidence"] >= minimum_confidence]
    kept_ids = {c["identifier"] for c in kept}
    raw = {c["identifier"]: c["confidence"] for c in classifications}

    for identifier in include_identifiers:
        if identifier in kept_ids:
            continue
        kept.append({"identifier": identifier, "confidence": float(raw.get(identifier, 0.0))})
        kept_ids.add(identifier)

    return kept


class ClassifyCommand:
    """Classifies the whole image into labels with confidences."""

    def __init__(self, classifier, loader=load_image):
        self.classifier = classifier
        self.loader = loader

    def analyze(self, frame, minimum_confidence=0.4, include_identifiers=()):
        return filter_classifications(
            self.classifier.classify(frame),
            minimum_confidence=minimum_confidence,
            include_identifiers=include_identifiers,
        )

    def run(self, input, minimum_confidence=0.4, include_identifiers=()):
        frame = self.loader(input)
        return {
            "input": input,
            "classifications": self.analyze(frame, minimum_confidence, include_identifiers),
        }
