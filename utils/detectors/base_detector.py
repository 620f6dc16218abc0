# utils/detectors/base_detector.py

class BaseDetector:
    """
    Abstract interface for region detectors (faces, humans).
    Every backend follows the same prepare() / detect() API.
    """

    def prepare(self):
        """
        Load model weights, allocate resources, set device.
        Called once before using `detect`.
        """
        raise NotImplementedError("prepare() must be implemented by subclasses")

    def detect(self, frame):
        """
        Detect regions in a BGR frame.

        Parameters
        ----------
        frame : numpy.ndarray
            BGR image (H, W, 3) as read by cv2.

        Returns
        -------
        List[dict]
            A list of detection dictionaries with this shape:
            [
                {
                    'bbox': (x1, y1, x2, y2),
                    'score': float,
                    'kps': {...},              # faces only
                    'pose': (pitch, yaw, roll) # faces only, radians
                },
                ...
            ]

        Notes
        -----
        - Coordinates are in image pixel space (int).
        - kps may be empty or partial if detector doesn't provide all points.
        """
        raise NotImplementedError("detect() must be implemented by subclasses")
