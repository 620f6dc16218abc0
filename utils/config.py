# utils/config.py

import copy
import json
import os

DEFAULT_CONFIG_PATH = "config/app_config.json"

DEFAULT_CONFIG = {
    "log_file": None,
    "http": {
        "timeout": 10
    },
    "faces": {
        "model_name": "buffalo_l",
        "det_size": [640, 640],
        "ctx_id": -1,
        "min_confidence": 0.5
    },
    "humans": {
        "win_stride": [8, 8],
        "padding": [8, 8],
        "scale": 1.05
    },
    "text": {
        "detector_model": "models/text/DB_TD500_resnet18.onnx",
        "recognizer_model": "models/text/crnn_cs.onnx",
        "vocabulary": "models/text/alphabet_94.txt",
        "input_size": [736, 736],
        "grayscale": False,
        "binary_threshold": 0.3,
        "polygon_threshold": 0.5
    },
    "poses": {
        "model": "models/pose/pose_iter_440000.caffemodel",
        "proto": "models/pose/openpose_pose_coco.prototxt",
        "input_size": [368, 368],
        "joint_threshold": 0.1,
        "line_threshold": 0.5
    },
    "classify": {
        "model_name": "openai/clip-vit-base-patch32",
        "prompt": "a photo of {}",
        "minimum_confidence": 0.4,
        "labels": [
            "person", "people", "animal", "cat", "dog", "bird", "horse",
            "car", "bicycle", "airplane", "boat", "train",
            "building", "house", "city", "street", "bridge",
            "food", "drink", "fruit", "plant", "flower", "tree",
            "sky", "sunset", "beach", "mountain", "forest", "water", "snow",
            "document", "screenshot", "text", "sign",
            "indoor", "outdoor", "night", "interior room", "furniture",
            "computer", "phone", "toy", "art", "painting"
        ]
    },
    "embeddings": {
        "model_name": "openai/clip-vit-base-patch32"
    },
    "subject": {
        "iterations": 5,
        "margin": 0.05
    },
    "nsfw": {
        "model": "models/nsfw/open_nsfw.onnx"
    }
}


def deep_merge(base, override):
    """Recursively merge `override` into a copy of `base`."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path=None):
    """
    Load the JSON app config and merge it over DEFAULT_CONFIG.

    Resolution order: explicit `path`, $SEEV_CONFIG, config/app_config.json.
    Only the implicit default file may be absent.
    """
    explicit = path or os.environ.get("SEEV_CONFIG")
    config_path = explicit or DEFAULT_CONFIG_PATH

    if not os.path.isfile(config_path):
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, "r") as f:
        try:
            user_config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON format in {config_path}: {e}") from e

    if not isinstance(user_config, dict):
        raise ValueError(f"Config root must be an object: {config_path}")

    return deep_merge(DEFAULT_CONFIG, user_config)
