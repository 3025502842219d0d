# Author      : Tyson Limato
# Date        : 2025-7-5
# File Name   : orchestrator.py
import sys
import time
from enum import Enum

import numpy as np

from group_context import GroupContext
from mpiMGR import MPIManager
from partition import plan
from validator import CollectiveAbort, CollectiveValidator
from vector_io import ConsoleSource, print_vector
from vector_ops import elementwise_sum, elementwise_sum_gpu, pick_gpu

EXIT_OK = 0
EXIT_ABORTED = 1


class State(Enum):
    INIT = "init"
    READ_SIZE = "read_size"
    VALIDATE_SIZE = "validate_size"
    ALLOCATE = "allocate"
    VALIDATE_ALLOC = "validate_alloc"
    SCATTER_X = "scatter_x"
    SCATTER_Y = "scatter_y"
    COMPUTE_SUM = "compute_sum"
    GATHER_Z = "gather_z"
    DONE = "done"
    ABORTED = "aborted"


class VectorSumRun:
    """
    Drives one parallel vector sum from reading n to printing the result.

    Every rank builds one of these and calls `run()`; the states are walked in
    the same fixed order everywhere, so all collectives line up:

        INIT -> READ_SIZE -> VALIDATE_SIZE -> ALLOCATE -> VALIDATE_ALLOC
             -> SCATTER_X -> SCATTER_Y -> COMPUTE_SUM -> GATHER_Z -> DONE

    A failed validation sends every rank to ABORTED together.

    Parameters:
    -----------
    ctx : GroupContext
        Identity of this rank.
    source : ConsoleSource or CsvSource
        Where the coordinator reads n, x and y (ignored on other ranks).
        Defaults to a ConsoleSource on stdin.
    out, err : file-like
        Coordinator output and diagnostic streams.
    echo_inputs : bool
        Gather and print x and y right after they are distributed.
    use_gpu : bool
        Compute the local sum with CuPy.
    debug : bool
        Cross-check chunk sizes before every scatter/gather.
    """

    def __init__(self, ctx: GroupContext, source=None, out=None, err=None,
                 echo_inputs=True, use_gpu=False, debug=False):
        self.ctx = ctx
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        if source is None and ctx.is_coordinator:
            source = ConsoleSource(out=self.out)
        self.source = source
        self.echo_inputs = echo_inputs
        self.use_gpu = use_gpu

        self.validator = CollectiveValidator(ctx, err=self.err)
        self.manager = MPIManager(ctx, debug=debug)

        self.state = State.INIT
        self.history = [State.INIT]
        self.timings = {}

        self.n = None
        self.local_n = None
        self.local_x = None
        self.local_y = None
        self.local_z = None
        self.result = None

    def run(self) -> int:
        """Execute every state in order. Returns the process exit status."""
        steps = [
            (State.READ_SIZE, self._read_size),
            (State.VALIDATE_SIZE, self._validate_size),
            (State.ALLOCATE, self._allocate),
            (State.VALIDATE_ALLOC, self._validate_alloc),
            (State.SCATTER_X, lambda: self._distribute("x")),
            (State.SCATTER_Y, lambda: self._distribute("y")),
            (State.COMPUTE_SUM, self._compute_sum),
            (State.GATHER_Z, self._gather_sum),
        ]
        try:
            for state, step in steps:
                self._enter(state)
                start = time.time()
                step()
                self.timings[state] = time.time() - start
        except CollectiveAbort as exc:
            self._enter(State.ABORTED)
            self.ctx.log(f"run aborted: {exc}")
            return EXIT_ABORTED

        self._enter(State.DONE)
        if self.ctx.is_coordinator:
            total = sum(self.timings.values())
            self.ctx.log(f"vector sum of order {self.n} finished in {total:.4f}s")
        return EXIT_OK

    def _enter(self, state: State):
        self.state = state
        self.history.append(state)
        self.ctx.log(f"-> {state.name}")

    # ------------------ States ------------------
    def _read_size(self):
        n = None
        if self.ctx.is_coordinator:
            n = self.source.read_n()
            if n is None:
                # unreadable input fails the size check on every rank
                n = -1
        self.n = self.manager.broadcast_scalar(n)

    def _validate_size(self):
        self.local_n, ok = plan(self.n, self.ctx.size)
        self.validator.check_or_abort(
            ok, "read_n", "n should be > 0 and evenly divisible by comm_sz")

    def _allocate(self):
        try:
            self.local_x = np.empty(self.local_n, dtype=np.float64)
            self.local_y = np.empty(self.local_n, dtype=np.float64)
            self.local_z = np.empty(self.local_n, dtype=np.float64)
        except (MemoryError, ValueError):
            # ValueError: local_n past numpy's maximum dimension
            self.local_x = self.local_y = self.local_z = None

    def _validate_alloc(self):
        ok = self.local_x is not None and self.local_y is not None and self.local_z is not None
        self.validator.check_or_abort(ok, "allocate_vectors", "Can't allocate local vector(s)")

    def _distribute(self, name: str):
        full = None
        if self.ctx.is_coordinator:
            full = self.source.read_vector(name, self.n)
        self.validator.check_or_abort(
            not self.ctx.is_coordinator or full is not None,
            "read_vector", f"Can't read vector {name}")

        local = self.manager.scatter(full, self.local_n)
        target = self.local_x if name == "x" else self.local_y
        target[:] = local
        self.ctx.log(f"received {name}[{self.ctx.rank * self.local_n}:"
                     f"{(self.ctx.rank + 1) * self.local_n}]")

        if self.echo_inputs:
            self._show(target, f"{name} is")

    def _compute_sum(self):
        if self.use_gpu:
            z = elementwise_sum_gpu(self.local_x, self.local_y, device=pick_gpu(self.ctx.rank))
        else:
            z = elementwise_sum(self.local_x, self.local_y)
        self.local_z[:] = z

    def _gather_sum(self):
        self.result = self._show(self.local_z, "The sum is")

    def _show(self, local: np.ndarray, title: str):
        full = self.manager.gather(local)
        if self.ctx.is_coordinator:
            print_vector(full, title, out=self.out)
        return full
