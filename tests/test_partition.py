import pytest

from swarmulate import ConfigurationError, Partition
from swarmulate.partition import block_sizes


@pytest.mark.mpi_skip
def test_block_sizes():
    """Test that leftover items go to the leading blocks."""
    assert block_sizes(8, 4) == [2, 2, 2, 2]
    assert block_sizes(10, 4) == [3, 3, 2, 2]
    assert block_sizes(3, 5) == [1, 1, 1, 0, 0]
    assert block_sizes(7, 1) == [7]


@pytest.mark.mpi_skip
def test_partition_blocks():
    """Test that blocks are contiguous, disjoint and cover the swarm."""
    partition = Partition(10, 4)
    assert partition.blocks == [range(0, 3), range(3, 6), range(6, 8), range(8, 10)]


@pytest.mark.mpi_skip
def test_partition_ranks():
    """Test the round-robin distribution of workers over ranks."""
    partition = Partition(10, 4, comm_size=3)
    assert partition.workers_of(0) == [0, 3]
    assert partition.workers_of(1) == [1]
    assert partition.workers_of(2) == [2]
    assert [partition.rank_of(w) for w in range(4)] == [0, 1, 2, 0]
    assert partition.indices_of(0) == [0, 1, 2, 8, 9]
    assert sorted(i for rank in range(3) for i in partition.indices_of(rank)) == list(range(10))

    # More ranks than workers leaves some ranks idle.
    partition = Partition(10, 2, comm_size=3)
    assert partition.workers_of(2) == []
    assert partition.indices_of(2) == []


@pytest.mark.mpi_skip
def test_invalid_partition():
    """Test that non-positive sizes are rejected."""
    with pytest.raises(ConfigurationError):
        Partition(0, 4)
    with pytest.raises(ConfigurationError):
        Partition(10, 0)
    with pytest.raises(ConfigurationError):
        Partition(10, 4, comm_size=0)
