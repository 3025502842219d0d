# Author      : Tyson Limato
# Date        : 2025-7-3
# File Name   : vector_ops.py
import numpy as np


# ------------------ Element-wise sum (CPU) ------------------
def elementwise_sum(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Add two local slices element by element: z[i] = x[i] + y[i].

    Parameters:
    -----------
    x, y : np.ndarray
        Slices of the same length.

    Returns:
    --------
    np.ndarray
        A new float64 array; the inputs are left untouched.
    """
    if len(x) != len(y):
        raise ValueError(f"elementwise_sum: length mismatch {len(x)} != {len(y)}")
    z = np.empty(len(x), dtype=np.float64)
    np.add(x, y, out=z)
    return z


# ------------------ Element-wise sum (GPU) ------------------
def elementwise_sum_gpu(x: np.ndarray, y: np.ndarray, device=None) -> np.ndarray:
    """
    Same as `elementwise_sum` but computed on a GPU with CuPy.

    The slices are copied to the device, added there, and the result is
    copied back to host memory so it can go straight into an MPI Gather.
    """
    import cupy as cp

    if len(x) != len(y):
        raise ValueError(f"elementwise_sum_gpu: length mismatch {len(x)} != {len(y)}")
    if device is not None:
        cp.cuda.Device(device).use()
    x_gpu = cp.asarray(x, dtype=cp.float64)
    y_gpu = cp.asarray(y, dtype=cp.float64)
    return cp.asnumpy(x_gpu + y_gpu)


def pick_gpu(rank: int) -> int:
    """Map a rank onto one of the visible GPUs (round robin)."""
    import cupy as cp

    return rank % cp.cuda.runtime.getDeviceCount()
