# ------------------------------------------------------------
# Author      : Tyson Limato
# Date        : 2025-7-6
# File Name   : vecsum.py
# Description : Parallel vector sum with MPI. Rank 0 reads the order n and
#               the vectors x and y, scatters equal blocks to every rank,
#               each rank adds its block, and rank 0 gathers and prints
#               the sum. Bad input (n not divisible by the number of
#               processes, unreadable vectors, failed allocation) stops
#               every rank together with a single diagnostic line.
#
# Usage       : mpiexec -n 4 python vecsum.py            (read from stdin)
#               mpiexec -n 4 python vecsum.py --csv vectors.csv
#               mpiexec -n 4 python vecsum.py --greet
#
# Dependencies:
#       - mpi4py
#       - numpy
#       - pandas (for --csv)
#       - cupy (optional, for --gpu)
# ------------------------------------------------------------
import argparse
import sys

from greetings import greet
from group_context import establish_group, teardown_group
from orchestrator import VectorSumRun
from vector_io import ConsoleSource, CsvSource


def build_parser():
    parser = argparse.ArgumentParser(description="Parallel vector sum with MPI")
    parser.add_argument('--csv',       type=str, default=None,
                        help="read x and y from the columns of a CSV file instead of stdin")
    parser.add_argument('--gpu',       action='store_true', help="add the local blocks on a GPU (CuPy)")
    parser.add_argument('--greet',     action='store_true', help="run the point-to-point greeting example")
    parser.add_argument('--no-echo',   action='store_true', help="do not print x and y after reading them")
    parser.add_argument('--no-prompt', action='store_true', help="do not prompt for input on stdin")
    parser.add_argument('--debug',     action='store_true', help="cross-check chunk sizes on every collective")
    parser.add_argument('--verbose', '-v', action='store_true', help="per-rank trace output")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    ctx = establish_group(verbose=args.verbose)

    try:
        if args.greet:
            greet(ctx)
            return 0

        source = None
        if ctx.is_coordinator:
            if args.csv:
                source = CsvSource(args.csv)
            else:
                source = ConsoleSource(prompt=not args.no_prompt)

        run = VectorSumRun(ctx, source=source, echo_inputs=not args.no_echo,
                           use_gpu=args.gpu, debug=args.debug)
        return run.run()
    finally:
        teardown_group(ctx)


if __name__ == "__main__":
    sys.exit(main())
