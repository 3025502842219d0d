# Author      : Tyson Limato
# Date        : 2025-7-3
# File Name   : mpiMGR.py
import numpy as np
from mpi4py import MPI

from group_context import GroupContext


class ProtocolError(RuntimeError):
    """Ranks disagreed on the shape of a collective (debug mode only)."""


class MPIManager:
    """
    A utility class to move vector data between ranks using `mpi4py`.

    Every method is a collective: all ranks must call it in the same order
    with matching sizes. Shapes are the caller's responsibility unless the
    manager was built with `debug=True`.

    Methods:
    --------
    broadcast_scalar(value, root=0)
        Replicate an integer held by the root on every rank.

    scatter(full, local_n, root=0)
        Split a root-held vector into equal contiguous chunks, one per rank.

    gather(local, root=0)
        Reassemble every rank's chunk, in rank order, on the root.
    """

    def __init__(self, ctx: GroupContext, debug: bool = False):
        self.ctx = ctx
        self.comm = ctx.comm
        self.rank = ctx.rank
        self.size = ctx.size
        self.debug = debug

    def broadcast_scalar(self, value, root: int = 0) -> int:
        """
        Broadcast an integer from the root process to all other MPI processes.

        Parameters:
        -----------
        value : int or None
            The value to send (only read on the root).
        root : int
            The rank that holds the value (default is 0).
        """
        value = self.comm.bcast(value if self.rank == root else None, root=root)
        return int(value)

    def scatter(self, full, local_n: int, root: int = 0) -> np.ndarray:
        """
        Scatter contiguous float64 chunks of `full` from the root to all ranks.

        Parameters:
        -----------
        full : np.ndarray or None
            The complete vector of length size * local_n. Only read on the root;
            pass None elsewhere.
        local_n : int
            Number of elements each rank receives.

        Returns:
        --------
        np.ndarray
            This rank's chunk, covering global indices [rank*local_n, (rank+1)*local_n).
        """
        self._check_shape("scatter", local_n)
        sendbuf = None
        if self.rank == root:
            full = np.ascontiguousarray(full, dtype=np.float64)
            if full.shape != (self.size * local_n,):
                raise ValueError(
                    f"scatter: root holds {full.size} elements, "
                    f"expected {self.size} x {local_n}"
                )
            sendbuf = [full, MPI.DOUBLE]
        local = np.empty(local_n, dtype=np.float64)
        self.comm.Scatter(sendbuf, [local, MPI.DOUBLE], root=root)
        return local

    def gather(self, local: np.ndarray, root: int = 0):
        """
        Gather every rank's chunk back into a single vector on the root.

        Returns:
        --------
        np.ndarray or None
            The concatenation of all chunks in rank order on the root, None elsewhere.
        """
        local = np.ascontiguousarray(local, dtype=np.float64)
        self._check_shape("gather", local.size)
        recvbuf = None
        if self.rank == root:
            full = np.empty(self.size * local.size, dtype=np.float64)
            recvbuf = [full, MPI.DOUBLE]
        self.comm.Gather([local, MPI.DOUBLE], recvbuf, root=root)
        return recvbuf[0] if recvbuf is not None else None

    def _check_shape(self, op: str, local_n: int):
        if not self.debug:
            return
        sizes = self.comm.allgather(int(local_n))
        if any(s != sizes[0] for s in sizes):
            raise ProtocolError(f"{op}: ranks disagree on chunk size {sizes}")
        self.ctx.log(f"{op}: chunk size {local_n} agreed by {len(sizes)} rank(s)")
