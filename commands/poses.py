# commands/poses.py

from utils.drawing import draw
from utils.image_io import load_image, save_image
from utils.logs import log
from utils.pose_estimator import joint_points, skeleton_lines


class PoseCommand:
    """Detects human body poses as named joints."""

    def __init__(self, estimator, loader=load_image, line_threshold=0.5):
        self.estimator = estimator
        self.loader = loader
        self.line_threshold = line_threshold

    def analyze(self, frame):
        return self.estimator.estimate(frame)

    def run(self, input, output=None):
        frame = self.loader(input)
        poses = self.analyze(frame)

        if output:
            annotated = draw(
                frame,
                points=joint_points(poses),
                lines=skeleton_lines(poses, threshold=self.line_threshold),
            )
            save_image(output, annotated)
            log(f"Saved poses to {output}")

        return {"input": input, "poses": poses}
