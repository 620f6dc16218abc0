# utils/hashing.py

import hashlib

import requests

from utils.errors import ImageReadError
from utils.image_io import is_url

CHUNK_SIZE = 1 << 16


def sha1_hex(source, timeout=10):
    """Lowercase hex SHA-1 of a local file or the body of an http(s) URL."""
    digest = hashlib.sha1()

    if is_url(source):
        with requests.get(source, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                digest.update(chunk)
        return digest.hexdigest()

    try:
        with open(source, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)
    except FileNotFoundError:
        raise ImageReadError(f"File not found: {source}")

    return digest.hexdigest()
