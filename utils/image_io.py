# utils/image_io.py

import os
import sys

import cv2
import numpy as np
import requests

from utils.errors import ImageReadError, OutputError


def is_url(source):
    return source.lower().startswith(("http://", "https://"))


def read_bytes(source, timeout=10):
    """Raw bytes of a local file or an http(s) resource."""
    if is_url(source):
        resp = requests.get(source, timeout=timeout)
        resp.raise_for_status()
        return resp.content

    if not os.path.isfile(source):
        raise ImageReadError(f"File not found: {source}")
    with open(source, "rb") as f:
        return f.read()


def decode_image(data, flags=cv2.IMREAD_COLOR):
    buf = np.frombuffer(data, dtype=np.uint8)
    if buf.size == 0:
        return None
    return cv2.imdecode(buf, flags)


def load_image(source, timeout=10):
    """
    Load an image as a BGR numpy array (H, W, 3).
    Raises ImageReadError if the source can't be read or decoded.
    """
    img = decode_image(read_bytes(source, timeout=timeout))
    if img is None:
        raise ImageReadError(f"Cannot read image: {source}")
    return img


def encode_png(image):
    ok, encoded = cv2.imencode(".png", image)
    if not ok:
        raise OutputError("Failed to encode image as PNG")
    return encoded.tobytes()


def save_image(path, image):
    """
    Save as PNG regardless of the extension given, creating parent dirs.
    """
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, "wb") as f:
        f.write(encode_png(image))
    return path


def write_png_stdout(image, stream=None):
    stream = stream if stream is not None else sys.stdout.buffer
    stream.write(encode_png(image))
    stream.flush()
