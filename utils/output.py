# utils/output.py

import json
import sys

import numpy as np


def _default(obj):
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, set):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def to_json(result):
    return json.dumps(result, indent=2, default=_default)


def print_json(result, stream=None):
    stream = stream if stream is not None else sys.stdout
    stream.write(to_json(result) + "\n")
    stream.flush()
