import numpy as np
import pytest

from utils.errors import NoSubjectFoundError
from utils.subject_segmenter import SubjectSegmenter, apply_mask


def test_apply_mask_sets_alpha(frame):
    mask = np.zeros(frame.shape[:2], dtype=np.uint8)
    mask[20:80, 50:150] = 255

    out = apply_mask(frame, mask)
    assert out.shape == (100, 200, 4)
    assert out[50, 100, 3] == 255
    assert out[5, 5, 3] == 0
    assert tuple(out[50, 100, :3]) == (0, 128, 255)


def test_apply_mask_cropped_to_extent(frame):
    mask = np.zeros(frame.shape[:2], dtype=np.uint8)
    mask[20:80, 50:150] = 255

    out = apply_mask(frame, mask, cropped=True)
    assert out.shape == (60, 100, 4)
    assert (out[:, :, 3] == 255).all()


def test_apply_mask_empty_raises(frame):
    with pytest.raises(NoSubjectFoundError):
        apply_mask(frame, np.zeros(frame.shape[:2], dtype=np.uint8))


def test_segment_tiny_image_raises():
    with pytest.raises(NoSubjectFoundError):
        SubjectSegmenter().segment(np.zeros((1, 1, 3), dtype=np.uint8))


def test_grabcut_separates_block_from_background():
    rng = np.random.RandomState(7)
    img = rng.randint(110, 140, (120, 120, 3)).astype(np.uint8)
    img[40:80, 40:80] = rng.randint(0, 30, (40, 40, 3)).astype(np.uint8)
    img[40:80, 40:80, 2] = 230

    mask = SubjectSegmenter(iterations=5, margin=0.05).segment(img)

    assert mask.dtype == np.uint8
    assert mask[60, 60] == 255
    assert mask[0, 0] == 0
