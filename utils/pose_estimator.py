# utils/pose_estimator.py

import cv2

from utils.errors import require_model

# OpenPose COCO output channels (18 = background)
COCO_JOINTS = [
    "nose", "neck",
    "right_shoulder", "right_elbow", "right_wrist",
    "left_shoulder", "left_elbow", "left_wrist",
    "right_hip", "right_knee", "right_ankle",
    "left_hip", "left_knee", "left_ankle",
    "right_eye", "left_eye", "right_ear", "left_ear",
]

SKELETON_PAIRS = [
    ("neck", "root"),
    ("left_shoulder", "right_shoulder"),
    ("left_shoulder", "left_elbow"),
    ("right_shoulder", "right_elbow"),
    ("left_elbow", "left_wrist"),
    ("right_elbow", "right_wrist"),
    ("left_hip", "right_hip"),
    ("left_hip", "left_knee"),
    ("right_hip", "right_knee"),
    ("left_knee", "left_ankle"),
    ("right_knee", "right_ankle"),
]


def add_root(joints):
    """
    Append a 'root' joint at the hip midpoint when both hips are present.
    Its confidence is the weaker of the two hips.
    """
    by_name = {j["name"]: j for j in joints}
    left, right = by_name.get("left_hip"), by_name.get("right_hip")
    if left is None or right is None or "root" in by_name:
        return joints
    root = {
        "name": "root",
        "x": (left["x"] + right["x"]) / 2.0,
        "y": (left["y"] + right["y"]) / 2.0,
        "confidence": min(left["confidence"], right["confidence"]),
    }
    return joints + [root]


def skeleton_lines(poses, threshold=0.5):
    """
    Line segments between connected joints for drawing.
    A segment is kept only if both joints exist and both reach `threshold`.
    """
    lines = []
    for pose in poses:
        by_name = {j["name"]: j for j in pose["joints"]}
        for a, b in SKELETON_PAIRS:
            ja, jb = by_name.get(a), by_name.get(b)
            if ja is None or jb is None:
                continue
            if ja["confidence"] < threshold or jb["confidence"] < threshold:
                continue
            lines.append(((ja["x"], ja["y"]), (jb["x"], jb["y"])))
    return lines


def joint_points(poses):
    return [(j["x"], j["y"]) for pose in poses for j in pose["joints"]]


class PoseEstimator:
    """
    Single-person body pose from the OpenPose COCO Caffe model (cv2.dnn).
    Each joint is the peak of its heatmap; peaks under `joint_threshold`
    are dropped. Coordinates are normalized to [0, 1].
    """

    def __init__(self, model, proto, input_size=(368, 368), joint_threshold=0.1):
        self.model = model
        self.proto = proto
        self.input_size = tuple(input_size)
        self.joint_threshold = joint_threshold
        self.net = None

    def prepare(self):
        require_model(self.model, "pose model")
        require_model(self.proto, "pose prototxt")
        self.net = cv2.dnn.readNet(self.model, self.proto)

    def estimate(self, frame):
        if self.net is None:
            raise RuntimeError("PoseEstimator not prepared. Call prepare() first.")

        blob = cv2.dnn.blobFromImage(frame, 1.0 / 255, self.input_size, (0, 0, 0), swapRB=False, crop=False)
        self.net.setInput(blob)
        out = self.net.forward()

        out_h, out_w = out.shape[2], out.shape[3]
        joints = []
        for i, name in enumerate(COCO_JOINTS):
            heatmap = out[0, i, :, :]
            _, conf, _, point = cv2.minMaxLoc(heatmap)
            if conf < self.joint_threshold:
                continue
            joints.append({
                "name": name,
                "x": point[0] / float(out_w),
                "y": point[1] / float(out_h),
                "confidence": float(conf),
            })

        if not joints:
            return []
        return [{"joints": add_root(joints)}]
