import io

import cv2
import numpy as np
import pytest

from utils import image_io
from utils.errors import ImageReadError
from utils.image_io import encode_png, is_url, load_image, read_bytes, save_image, write_png_stdout

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class FakeResponse:
    def __init__(self, content):
        self.content = content

    def raise_for_status(self):
        pass


def test_is_url():
    assert is_url("https://example.com/a.jpg")
    assert is_url("HTTP://example.com/a.jpg")
    assert not is_url("/tmp/a.jpg")
    assert not is_url("photos/http.jpg")


def test_load_image_from_file(image_path, frame):
    img = load_image(image_path)
    assert img.shape == frame.shape
    assert np.array_equal(img, frame)


def test_load_image_missing_file(tmp_path):
    with pytest.raises(ImageReadError, match="File not found"):
        load_image(str(tmp_path / "nope.png"))


def test_load_image_not_an_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_bytes(b"definitely not a png")
    with pytest.raises(ImageReadError, match="Cannot read image"):
        load_image(str(path))


def test_load_image_from_url(monkeypatch, frame):
    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        return FakeResponse(encode_png(frame))

    monkeypatch.setattr(image_io.requests, "get", fake_get)

    img = load_image("https://example.com/input.png", timeout=3)
    assert np.array_equal(img, frame)
    assert calls == [("https://example.com/input.png", 3)]


def test_read_bytes_from_file(image_path):
    with open(image_path, "rb") as f:
        assert read_bytes(image_path) == f.read()


def test_save_image_writes_png_and_creates_dirs(tmp_path, frame):
    path = tmp_path / "nested" / "out.jpg"
    save_image(str(path), frame)
    assert path.read_bytes().startswith(PNG_SIGNATURE)
    assert np.array_equal(cv2.imread(str(path)), frame)


def test_write_png_stdout_keeps_alpha(frame):
    bgra = cv2.cvtColor(frame, cv2.COLOR_BGR2BGRA)
    stream = io.BytesIO()
    write_png_stdout(bgra, stream=stream)

    data = stream.getvalue()
    assert data.startswith(PNG_SIGNATURE)
    decoded = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_UNCHANGED)
    assert decoded.shape == (100, 200, 4)
