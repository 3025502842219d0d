# Author      : Tyson Limato
# Date        : 2025-7-2
# File Name   : group_context.py
from dataclasses import dataclass, field
from typing import Any

from mpi4py import MPI


@dataclass(frozen=True)
class GroupContext:
    """
    Identity of this process inside the MPI job.

    Built once at startup and handed to every component that needs to know
    who it is, instead of keeping the communicator in module globals.

    Attributes:
    -----------
    comm : MPI.Comm
        Communicator every collective call goes through.
    rank : int
        This process' id, 0 <= rank < size.
    size : int
        Number of cooperating processes (identical on every rank).
    verbose : bool
        Enables the rank-prefixed trace printed by `log`.
    owns_world : bool
        True when the context wraps MPI.COMM_WORLD and is allowed to finalize MPI.
    """
    comm: Any = field(repr=False)
    rank: int
    size: int
    verbose: bool = False
    owns_world: bool = False

    @property
    def is_coordinator(self) -> bool:
        return self.rank == 0

    def log(self, message: str):
        """Print a trace line tagged with this rank (only when verbose)."""
        if self.verbose:
            print(f"[Rank {self.rank}] {message}", flush=True)


def establish_group(comm=None, verbose: bool = False) -> GroupContext:
    """
    Create the GroupContext for this process.

    Parameters:
    -----------
    comm : MPI.Comm or compatible object
        Communicator to use. Defaults to MPI.COMM_WORLD.
    verbose : bool
        Turn on per-rank trace output.
    """
    owns_world = comm is None
    if comm is None:
        comm = MPI.COMM_WORLD
    ctx = GroupContext(comm=comm, rank=comm.Get_rank(), size=comm.Get_size(),
                       verbose=verbose, owns_world=owns_world)
    ctx.log(f"joined group of {ctx.size} process(es)")
    return ctx


def teardown_group(ctx: GroupContext):
    """Finalize MPI once, at the top level. Injected communicators are left alone."""
    if not ctx.owns_world:
        return
    if MPI.Is_initialized() and not MPI.Is_finalized():
        ctx.log("finalizing MPI")
        MPI.Finalize()
