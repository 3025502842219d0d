import io
import os
import shutil
import subprocess
import sys

import pytest

import vecsum
from example_data_generator import generate_vector_data

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def no_finalize(monkeypatch):
    # MPI can only be finalized once per process; keep it alive for the other tests
    monkeypatch.setattr(vecsum, "teardown_group", lambda ctx: None)


def test_parser_defaults():
    args = vecsum.build_parser().parse_args([])
    assert args.csv is None
    assert not (args.gpu or args.greet or args.no_echo or args.no_prompt or args.debug or args.verbose)


def test_main_reads_stdin(no_finalize, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("2\n1.5 2\n3 4\n"))
    assert vecsum.main(["--no-prompt", "--no-echo"]) == 0
    assert capsys.readouterr().out == "The sum is\n4.500000 6.000000 \n"


def test_main_reads_csv(no_finalize, tmp_path, capsys):
    path = tmp_path / "vectors.csv"
    rows = generate_vector_data(3, str(path), seed=1)
    capsys.readouterr()
    assert vecsum.main(["--csv", str(path), "--no-echo"]) == 0
    expected = "".join(f"{x + y:f} " for x, y in rows)
    assert capsys.readouterr().out == f"The sum is\n{expected}\n"


def test_main_bad_order_exits_nonzero(no_finalize, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("0\n"))
    assert vecsum.main(["--no-prompt"]) == 1
    assert capsys.readouterr().err == (
        "Proc 0 > In read_n, n should be > 0 and evenly divisible by comm_sz\n"
    )


def test_main_greet(no_finalize, capsys):
    assert vecsum.main(["--greet"]) == 0
    assert capsys.readouterr().out == "Process 0 of 1 > Does anyone have a toothpick? \n"


# ------------------ Real multi-process runs ------------------
def _mpiexec_env():
    env = dict(os.environ)
    env.setdefault("OMPI_ALLOW_RUN_AS_ROOT", "1")
    env.setdefault("OMPI_ALLOW_RUN_AS_ROOT_CONFIRM", "1")
    env.setdefault("OMPI_MCA_rmaps_base_oversubscribe", "1")
    return env


def _mpiexec(nprocs, args, stdin=""):
    cmd = [shutil.which("mpiexec"), "-n", str(nprocs), sys.executable] + args
    return subprocess.run(cmd, input=stdin, capture_output=True, text=True,
                          cwd=ROOT, env=_mpiexec_env(), timeout=120)


@pytest.fixture(scope="module")
def mpiexec_two_ranks():
    if shutil.which("mpiexec") is None:
        pytest.skip("mpiexec not on PATH")
    try:
        probe = _mpiexec(2, ["-c", "from mpi4py import MPI; c = MPI.COMM_WORLD; c.Get_rank() == 0 and print(c.Get_size())"])
    except subprocess.TimeoutExpired:
        pytest.skip("mpiexec probe timed out")
    if probe.returncode != 0 or probe.stdout.split() != ["2"]:
        pytest.skip("mpiexec does not launch a 2-rank mpi4py job here")


def test_mpiexec_two_ranks_sum(mpiexec_two_ranks):
    proc = _mpiexec(2, ["vecsum.py", "--no-prompt"], stdin="4\n1 2 3 4\n10 20 30 40\n")
    assert proc.returncode == 0, proc.stderr
    assert "The sum is\n11.000000 22.000000 33.000000 44.000000 \n" in proc.stdout


def test_mpiexec_indivisible_order_aborts(mpiexec_two_ranks):
    proc = _mpiexec(2, ["vecsum.py", "--no-prompt"], stdin="3\n1 2 3\n1 2 3\n")
    assert proc.returncode != 0
    assert proc.stderr.count("Proc 0 > In read_n") == 1
    assert "The sum is" not in proc.stdout
