# Author      : Tyson Limato
# Date        : 2025-7-2
# File Name   : validator.py
import sys

from mpi4py import MPI

from group_context import GroupContext


class CollectiveAbort(Exception):
    """
    Raised on every rank when a collective precondition check fails.

    Attributes:
    -----------
    context : str
        Name of the stage that ran the check (e.g. "read_n").
    message : str
        Human readable reason.
    """
    def __init__(self, context: str, message: str):
        super().__init__(f"In {context}, {message}")
        self.context = context
        self.message = message


class CollectiveValidator:
    """
    Combines per-rank validity flags so that every rank takes the same decision.

    Both methods are collectives: every rank in the group has to call them,
    in the same order, or the job deadlocks.

    Methods:
    --------
    all_ok(local_ok)
        Logical AND of the flag over all ranks.

    check_or_abort(local_ok, context, message)
        Raise CollectiveAbort on every rank if any rank reported failure.
    """

    def __init__(self, ctx: GroupContext, err=None):
        self.ctx = ctx
        self.err = err if err is not None else sys.stderr

    def all_ok(self, local_ok: bool) -> bool:
        # MIN over 0/1 is a logical AND that every MPI implementation supports
        ok = self.ctx.comm.allreduce(1 if local_ok else 0, op=MPI.MIN)
        return ok == 1

    def check_or_abort(self, local_ok: bool, context: str, message: str):
        if self.all_ok(local_ok):
            return
        if self.ctx.is_coordinator:
            self.err.write(f"Proc {self.ctx.rank} > In {context}, {message}\n")
            self.err.flush()
        self.ctx.log(f"aborting after failed check in {context} (local_ok={bool(local_ok)})")
        raise CollectiveAbort(context, message)
