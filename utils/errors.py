# utils/errors.py

import os


class SeeVError(Exception):
    """Base class for errors reported by the seev commands."""


class NoSubjectFoundError(SeeVError):
    """
    `result` holds whatever the command had already computed, so the CLI
    can still print it before reporting the error.
    """

    def __init__(self, message="No subject found in the image", result=None):
        super().__init__(message)
        self.result = result


class ImageReadError(SeeVError):
    pass


class OutputError(SeeVError):
    pass


class ModelUnavailableError(SeeVError):
    """A backend's model file is not configured or does not exist."""


def require_model(path, what="model"):
    if not path:
        raise ModelUnavailableError(f"No {what} configured")
    if not os.path.isfile(path):
        raise ModelUnavailableError(f"{what} not found: {path}")
    return path
