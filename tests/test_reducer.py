import numpy as np
import pytest
from mpi4py import MPI

from swarmulate import GlobalBestReducer, Particle, Partition, Swarm
from swarmulate.reducer import local_best, merge_local_bests


@pytest.mark.mpi_skip
def test_local_best_first_wins():
    """Test that the local scan keeps the first of several equal minima."""
    fitness = [3.0, 1.0, 2.0, 1.0]
    assert local_best(fitness, range(4)) == (1, 1.0)
    assert local_best(fitness, range(2, 4)) == (3, 1.0)
    assert local_best(fitness, range(0)) == (None, np.inf)


@pytest.mark.mpi_skip
def test_merge_last_wins():
    """Test that the merge lets the last worker with an equal minimum win."""
    assert merge_local_bests([(0, 1.0), (3, 0.5), (5, 0.5), (7, 2.0)]) == 5
    assert merge_local_bests([(0, 0.5), (3, 1.0)]) == 0
    assert merge_local_bests([(2, 1.0), (None, np.inf)]) == 2
    with pytest.raises(ValueError):
        merge_local_bests([])


@pytest.mark.mpi_skip
def test_duplicate_minima_across_partitions():
    """Test the exact index reported for duplicate minima placed in different partitions."""
    reducer = GlobalBestReducer(Partition(8, 4))  # Blocks [0, 1], [2, 3], [4, 5], [6, 7]
    fitness = np.array([5.0, 0.0, 3.0, 4.0, 0.0, 0.0, 1.0, 2.0])
    # Worker 0 reports 1, worker 2 reports 4 (first in its block), the merge picks the later worker.
    assert reducer.reduce_array(fitness) == 4

    fitness = np.array([0.0, 0.0, 3.0, 4.0, 1.0, 1.0, 1.0, 2.0])
    assert reducer.reduce_array(fitness) == 0

    fitness = np.array([0.0, 1.0, 3.0, 0.0, 1.0, 1.0, 1.0, 0.0])
    assert reducer.reduce_array(fitness) == 7


@pytest.mark.mpi_skip
def test_uneven_partitions():
    """Test the reduction for partitions not evenly dividing the swarm."""
    reducer = GlobalBestReducer(Partition(10, 4))  # Blocks [0-2], [3-5], [6, 7], [8, 9]
    fitness = np.array([1.0, 1.0, 1.0, -1.0, 1.0, -1.0, 1.0, 1.0, 1.0, 1.0])
    assert reducer.reduce_array(fitness) == 3
    fitness[6] = -1.0
    assert reducer.reduce_array(fitness) == 6

    # More workers than particles leaves trailing workers empty.
    reducer = GlobalBestReducer(Partition(3, 5))
    assert reducer.reduce_array(np.array([0.0, 1.0, 0.0])) == 2


@pytest.mark.mpi_skip
def test_single_worker():
    """Test that a single worker reduces to one linear scan."""
    reducer = GlobalBestReducer(Partition(6, 1))
    assert reducer.reduce_array(np.array([3.0, 2.0, 0.5, 4.0, 1.0, 0.5])) == 2


@pytest.mark.mpi_skip
def test_result_is_minimum():
    """Test that the reported particle always attains the minimum fitness."""
    rng = np.random.default_rng(42)
    for num_workers in (1, 2, 3, 7, 16):
        reducer = GlobalBestReducer(Partition(13, num_workers))
        for _ in range(20):
            fitness = rng.integers(0, 4, size=13).astype(float)  # Many ties
            assert fitness[reducer.reduce_array(fitness)] == fitness.min()


def test_reduce_swarm():
    """Test the distributed reduction on a swarm replica. This test is run both sequentially and in parallel."""
    fitness = [5.0, 0.0, 3.0, 4.0, 0.0, 0.0, 1.0, 2.0]
    particles = []
    for f in fitness:
        particle = Particle(2)
        particle.fitness = f
        particles.append(particle)
    swarm = Swarm(particles)

    comm = MPI.COMM_WORLD
    partition = Partition(len(swarm), 4, comm.size)
    reducer = GlobalBestReducer(partition, comm)
    assert reducer(swarm) == reducer.reduce_array(swarm.fitness) == 4
