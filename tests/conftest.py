import io

import pytest
from mpi4py import MPI

from group_context import establish_group


@pytest.fixture
def self_ctx():
    """Single-rank context on the real MPI.COMM_SELF."""
    return establish_group(MPI.COMM_SELF)


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()
