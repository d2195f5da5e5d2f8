"""
This file contains the two-level reduction determining the global best particle of the swarm.
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from mpi4py import MPI

from .partition import Partition
from .population import Swarm

log = logging.getLogger(__name__)

LocalBest = Tuple[Optional[int], float]


def local_best(fitness: Sequence[float], indices: Iterable[int]) -> LocalBest:
    """
    Find the best particle within one worker's partition.

    The partition is scanned in index order with a strict comparison, i.e., on ties the first particle encountered
    wins.

    Parameters
    ----------
    fitness : Sequence[float]
        The fitness of every particle in the swarm.
    indices : Iterable[int]
        The particle indices of the partition.

    Returns
    -------
    int | None
        The index of the best particle, None for an empty partition.
    float
        Its fitness, infinity for an empty partition.
    """
    best_index, best_fitness = None, np.inf
    for i in indices:
        if fitness[i] < best_fitness:
            best_fitness = fitness[i]
            best_index = i
    return best_index, best_fitness


def merge_local_bests(local_bests: Sequence[LocalBest]) -> int:
    """
    Merge the local results of all workers into the global best index.

    The local results are scanned in worker-id order. Unlike the local scan, every worker whose local best equals the
    minimum overwrites the running choice, i.e., on ties across partitions the worker with the highest id wins. With a
    single worker the merge cannot change the local result, so the first-encountered minimum is kept.

    Parameters
    ----------
    local_bests : Sequence[Tuple[int | None, float]]
        The local result of each worker, ordered by worker id.

    Returns
    -------
    int
        The index of the global best particle.

    Raises
    ------
    ValueError
        If no worker found a particle.
    """
    if len(local_bests) == 0:
        raise ValueError("Nothing to merge.")
    best_fitness = min(f for _, f in local_bests)
    global_index = local_bests[0][0]
    for index, fitness in local_bests:
        if fitness == best_fitness and index is not None:
            global_index = index
    if global_index is None:
        raise ValueError("No particle found in any partition.")
    return global_index


class GlobalBestReducer:
    """
    Two-level parallel reduction of the swarm's fitness values.

    Every rank computes the local results of the workers it executes. The local results are gathered on the root rank,
    which merges them in worker-id order and broadcasts the resulting index. The root is the only writer of the
    global best index; the gather acts as the barrier between the local and the merge step.

    Attributes
    ----------
    partition : swarmulate.partition.Partition
        The partition of the swarm over the workers.
    comm : MPI.Comm
        The communicator of the ranks executing the workers.
    root : int
        The rank merging the local results.
    """

    def __init__(self, partition: Partition, comm: MPI.Comm = MPI.COMM_WORLD, root: int = 0) -> None:
        self.partition = partition
        self.comm = comm
        self.root = root

    def local_bests(self, fitness: Sequence[float]) -> List[LocalBest]:
        """Compute the local results of all workers within a single process, ordered by worker id."""
        return [local_best(fitness, block) for block in self.partition.blocks]

    def reduce_array(self, fitness: Sequence[float]) -> int:
        """
        Reduce a plain fitness array without communication.

        Parameters
        ----------
        fitness : Sequence[float]
            The fitness of every particle.

        Returns
        -------
        int
            The global best index.
        """
        return merge_local_bests(self.local_bests(fitness))

    def __call__(self, swarm: Swarm) -> int:
        """
        Determine the global best particle of the swarm.

        Collective operation, must be called on all ranks of the communicator.

        Parameters
        ----------
        swarm : swarmulate.population.Swarm
            The swarm, synchronized across ranks.

        Returns
        -------
        int
            The global best index, identical on all ranks.
        """
        fitness = swarm.fitness
        own = {
            worker_id: local_best(fitness, self.partition.blocks[worker_id])
            for worker_id in self.partition.workers_of(self.comm.rank)
        }
        gathered = self.comm.gather(own, root=self.root)

        index = None
        if self.comm.rank == self.root:
            local_bests: dict = {}
            for part in gathered:
                local_bests.update(part)
            ordered = [local_bests[worker_id] for worker_id in range(self.partition.num_workers)]
            index = merge_local_bests(ordered)
            if log.isEnabledFor(logging.DEBUG):
                log.debug(f"Local bests {ordered} merged to global best index {index}.")
        return self.comm.bcast(index, root=self.root)
