# Author      : Tyson Limato
# Date        : 2025-7-6
# File Name   : greetings.py
#
# Point-to-point example: every rank asks rank 0 the same question and rank 0
# prints the questions in rank order.
import sys

from group_context import GroupContext

GREETING_TAG = 0


def question(rank: int, size: int) -> str:
    return f"Process {rank} of {size} > Does anyone have a toothpick?\n"


def own_question(rank: int, size: int) -> str:
    # the coordinator prints its own line with a space before the newline
    return f"Process {rank} of {size} > Does anyone have a toothpick? \n"


def greet(ctx: GroupContext, out=None):
    """
    Send this rank's line to the coordinator, or (on the coordinator)
    print its own line followed by everyone else's.

    Returns the list of lines written on the coordinator, None elsewhere.
    """
    comm = ctx.comm
    if not ctx.is_coordinator:
        comm.send(question(ctx.rank, ctx.size), dest=0, tag=GREETING_TAG)
        return None

    out = out if out is not None else sys.stdout
    lines = [own_question(ctx.rank, ctx.size)]
    out.write(lines[0])
    # receive from each source explicitly so the output is in rank order
    for source in range(1, ctx.size):
        msg = comm.recv(source=source, tag=GREETING_TAG)
        out.write(msg)
        lines.append(msg)
    out.flush()
    return lines
