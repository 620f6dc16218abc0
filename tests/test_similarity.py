import math

import numpy as np
import pytest

from utils.similarity import cosine_distance, cosine_similarity


def test_similarity_identity():
    v = [0.3, -1.2, 4.0, 2.5]
    assert cosine_similarity(v, v) == pytest.approx(1.0)


def test_similarity_opposite():
    v = [0.3, -1.2, 4.0, 2.5]
    assert cosine_similarity(v, [-x for x in v]) == pytest.approx(-1.0)


def test_similarity_orthogonal():
    assert abs(cosine_similarity([1.0, 0.0], [0.0, 1.0])) < 1e-12


def test_similarity_symmetric():
    a = [1.0, 2.0, 3.0]
    b = [-2.0, 0.5, 7.0]
    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


@pytest.mark.parametrize("k", [0.001, 2.0, 1e6])
def test_similarity_scale_invariant(k):
    a = [1.0, 2.0, 3.0]
    b = [-2.0, 0.5, 7.0]
    scaled = [k * x for x in a]
    assert cosine_similarity(scaled, b) == pytest.approx(cosine_similarity(a, b))


def test_similarity_known_value():
    assert cosine_similarity([1, 0, 0], [1, 1, 0]) == pytest.approx(1 / math.sqrt(2))


def test_similarity_accepts_numpy_arrays():
    a = np.array([1.0, 0.0, 0.0], dtype=np.float32)
    b = np.array([1.0, 1.0, 0.0], dtype=np.float32)
    result = cosine_similarity(a, b)
    assert isinstance(result, float)
    assert result == pytest.approx(0.7071067811865476)


def test_length_mismatch_raises():
    with pytest.raises(ValueError, match="length mismatch"):
        cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


def test_zero_vector_returns_zero():
    assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
    assert cosine_distance([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 1.0


def test_empty_vectors_return_zero():
    assert cosine_similarity([], []) == 0.0


def test_result_is_clipped():
    v = [1e-3, 3e-3, 7e-3]
    assert -1.0 <= cosine_similarity(v, v) <= 1.0


def test_distance_is_complement():
    a = [1.0, 0.0, 0.0]
    b = [1.0, 1.0, 0.0]
    assert cosine_distance(a, b) == pytest.approx(1 - 1 / math.sqrt(2))
    assert cosine_distance(a, a) == pytest.approx(0.0)
    assert cosine_distance(a, [-1.0, 0.0, 0.0]) == pytest.approx(2.0)


def test_large_magnitudes_do_not_overflow():
    big = [1e200, 1e200]
    assert cosine_similarity(big, [-1e200, -1e200]) == pytest.approx(-1.0)
    assert cosine_similarity(big, big) == pytest.approx(1.0)


def test_tiny_magnitudes_do_not_underflow():
    tiny = [1e-200, 1e-200]
    assert cosine_similarity(tiny, tiny) == pytest.approx(1.0)
    assert cosine_similarity([5e-324, 0.0], [1.0, 0.0]) == pytest.approx(1.0)


def test_scale_invariant_at_extreme_factor():
    a = [1.0, 2.0]
    b = [-2.0, -4.0]
    scaled = [1e300 * x for x in a]
    assert cosine_similarity(scaled, b) == pytest.approx(cosine_similarity(a, b))
    assert cosine_similarity(scaled, b) == pytest.approx(-1.0)


@pytest.mark.parametrize("bad", [
    [float("nan"), 1.0],
    [float("inf"), 1.0],
    [-float("inf"), float("inf")],
])
def test_non_finite_values_raise(bad):
    with pytest.raises(ValueError, match="NaN or infinite"):
        cosine_similarity(bad, [1.0, 1.0])
    with pytest.raises(ValueError):
        cosine_distance([1.0, 1.0], bad)


def test_matrix_input_is_rejected():
    with pytest.raises(ValueError, match="1-d"):
        cosine_similarity(np.ones((2, 3)), np.ones(6))
