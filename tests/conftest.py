import cv2
import numpy as np
import pytest


@pytest.fixture
def frame():
    """200x100 black BGR image with an orange block at (50, 20)-(150, 80)."""
    img = np.zeros((100, 200, 3), dtype=np.uint8)
    img[20:80, 50:150] = (0, 128, 255)
    return img


@pytest.fixture
def image_path(tmp_path, frame):
    path = tmp_path / "input.png"
    cv2.imwrite(str(path), frame)
    return str(path)
