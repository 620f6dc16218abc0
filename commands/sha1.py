# commands/sha1.py

from utils.hashing import sha1_hex


class Sha1Command:
    """Hashes the raw image file with SHA-1."""

    def __init__(self, timeout=10):
        self.timeout = timeout

    def run(self, input):
        return {"input": input, "sha1": sha1_hex(input, timeout=self.timeout)}
