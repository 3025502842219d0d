import numpy as np
import pytest

from vector_ops import elementwise_sum, elementwise_sum_gpu


def test_elementwise_sum():
    x = np.array([1.0, 2.0, 3.0])
    y = np.array([10.0, 20.0, 30.0])
    z = elementwise_sum(x, y)
    np.testing.assert_array_equal(z, [11.0, 22.0, 33.0])
    # inputs untouched
    np.testing.assert_array_equal(x, [1.0, 2.0, 3.0])


def test_elementwise_sum_length_mismatch():
    with pytest.raises(ValueError):
        elementwise_sum(np.zeros(2), np.zeros(3))


def test_elementwise_sum_gpu_matches_cpu():
    cp = pytest.importorskip("cupy")
    try:
        if cp.cuda.runtime.getDeviceCount() < 1:
            pytest.skip("no GPU visible")
    except cp.cuda.runtime.CUDARuntimeError:
        pytest.skip("no CUDA runtime")

    rng = np.random.default_rng(0)
    x, y = rng.random(64), rng.random(64)
    np.testing.assert_allclose(elementwise_sum_gpu(x, y, device=0), elementwise_sum(x, y))
