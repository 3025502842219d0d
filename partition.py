# Author      : Tyson Limato
# Date        : 2025-7-2
# File Name   : partition.py


def plan(n_global: int, size: int):
    """
    Work out how many elements each rank owns.

    Returns (local_n, ok). `ok` is False when n_global is not positive or not
    evenly divisible by the group size; local_n is 0 in that case and must not
    be used until `ok` has been agreed on by every rank.
    """
    if size <= 0 or n_global <= 0 or n_global % size != 0:
        return 0, False
    return n_global // size, True


def slice_bounds(rank: int, local_n: int):
    """Global [start, stop) indices of the contiguous block owned by `rank`."""
    start = rank * local_n
    return start, start + local_n
