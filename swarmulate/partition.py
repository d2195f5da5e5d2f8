"""
This file contains the data-parallel layout of a run, i.e., which particles belong to which logical worker and which
MPI rank executes which worker.
"""
from typing import List

from .errors import ConfigurationError


def block_sizes(num_items: int, num_blocks: int) -> List[int]:
    """
    Split a number of items into contiguous blocks that differ in size by at most one.

    The first ``num_items % num_blocks`` blocks receive one item more than the remaining ones. If there are more
    blocks than items, the trailing blocks are empty.

    Parameters
    ----------
    num_items : int
        The number of items to split.
    num_blocks : int
        The number of blocks.

    Returns
    -------
    List[int]
        The size of each block.
    """
    average = num_items // num_blocks
    leftover = num_items % num_blocks
    return [average + 1] * leftover + [average] * (num_blocks - leftover)


class Partition:
    """
    Block partition of the swarm over the logical workers.

    Worker ``w`` owns a contiguous range of particle indices. Workers are distributed round-robin over the ranks of
    the communicator, i.e., worker ``w`` runs on rank ``w % comm_size``. Since a worker always owns the same block and
    the same random stream, the trajectory of a run does not depend on the number of MPI ranks.

    Attributes
    ----------
    num_particles : int
        The swarm size.
    num_workers : int
        The number of logical workers.
    comm_size : int
        The number of ranks executing the workers.
    blocks : List[range]
        The particle indices owned by each worker.
    """

    def __init__(self, num_particles: int, num_workers: int, comm_size: int = 1) -> None:
        """
        Set up the partition.

        Parameters
        ----------
        num_particles : int
            The swarm size.
        num_workers : int
            The number of logical workers.
        comm_size : int, optional
            The number of MPI ranks executing the workers. Default is 1.

        Raises
        ------
        ConfigurationError
            If any of the sizes is not positive.
        """
        if num_particles < 1:
            raise ConfigurationError(f"Invalid swarm size: {num_particles}")
        if num_workers < 1:
            raise ConfigurationError(f"Invalid number of workers: {num_workers}")
        if comm_size < 1:
            raise ConfigurationError(f"Invalid communicator size: {comm_size}")
        self.num_particles = num_particles
        self.num_workers = num_workers
        self.comm_size = comm_size

        self.blocks: List[range] = []
        start = 0
        for size in block_sizes(num_particles, num_workers):
            self.blocks.append(range(start, start + size))
            start += size

    def rank_of(self, worker_id: int) -> int:
        """Get the MPI rank executing a worker."""
        return worker_id % self.comm_size

    def workers_of(self, rank: int) -> List[int]:
        """
        Get the workers executed by a rank in ascending id order.

        Parameters
        ----------
        rank : int
            The MPI rank.

        Returns
        -------
        List[int]
            The worker ids.
        """
        return [worker_id for worker_id in range(self.num_workers) if self.rank_of(worker_id) == rank]

    def indices_of(self, rank: int) -> List[int]:
        """Get all particle indices processed by a rank."""
        return [i for worker_id in self.workers_of(rank) for i in self.blocks[worker_id]]

    def __repr__(self) -> str:
        return (
            f"Partition(num_particles={self.num_particles}, num_workers={self.num_workers}, "
            f"comm_size={self.comm_size}, blocks={[len(b) for b in self.blocks]})"
        )
