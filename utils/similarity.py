# utils/similarity.py

import numpy as np


def _as_vector(v):
    arr = np.asarray(v, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"expected a 1-d vector, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("vector contains NaN or infinite values")
    return arr


def _unit_scaled(v):
    # Divide by the largest magnitude so the norm can neither overflow nor underflow.
    peak = np.max(np.abs(v)) if v.size else 0.0
    if peak == 0:
        return None
    scaled = v / peak
    return scaled / np.linalg.norm(scaled)


def cosine_similarity(a, b):
    """
    Compute cosine similarity between two feature vectors.

    Vectors must be 1-d, finite and of the same length (ValueError otherwise).
    A zero-magnitude vector has no direction, so the similarity is 0.0.
    """
    a = _as_vector(a)
    b = _as_vector(b)

    if a.shape[0] != b.shape[0]:
        raise ValueError(f"length mismatch: {a.shape[0]} != {b.shape[0]}")

    a = _unit_scaled(a)
    b = _unit_scaled(b)
    if a is None or b is None:
        return 0.0

    sim = float(np.dot(a, b))
    return float(np.clip(sim, -1.0, 1.0))


def cosine_distance(a, b):
    """1 - cosine similarity. 0.0 for identical directions, 2.0 for opposite."""
    return 1.0 - cosine_similarity(a, b)
