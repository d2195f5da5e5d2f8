"""
This file contains the pool of logical workers executing the data-parallel phases of a run.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from mpi4py import MPI

from .errors import PhaseError
from .partition import Partition
from .population import Particle, Swarm
from .random_stream import RandomStream

log = logging.getLogger(__name__)


class WorkerPool:
    """
    The logical workers hosted by this MPI rank.

    Every rank holds a replica of the whole swarm but only advances the particles of the workers it executes. Each
    worker owns one random stream, created once from the base seed and the worker id. After a phase that modified
    particles, ``synchronize`` publishes the owned particles to all other replicas.

    Phases are run via ``run_phase``, which ends with a collective over the communicator. No rank can start the next
    phase before every rank has finished the current one. An error raised by any rank within a phase aborts the phase on
    all ranks.

    Attributes
    ----------
    partition : swarmulate.partition.Partition
        The partition of the swarm over the workers.
    comm : MPI.Comm
        The communicator of the ranks executing the workers.
    streams : Dict[int, swarmulate.random_stream.RandomStream]
        The random streams of the workers hosted by this rank.
    """

    def __init__(self, partition: Partition, seed: int, comm: MPI.Comm = MPI.COMM_WORLD) -> None:
        """
        Set up the workers of this rank.

        Parameters
        ----------
        partition : swarmulate.partition.Partition
            The partition of the swarm over the workers.
        seed : int
            The base seed of the run.
        comm : MPI.Comm, optional
            The communicator of the ranks executing the workers. Default is ``MPI.COMM_WORLD``.
        """
        self.partition = partition
        self.comm = comm
        self.worker_ids: List[int] = partition.workers_of(comm.rank)
        self.streams: Dict[int, RandomStream] = {
            worker_id: RandomStream(seed, worker_id) for worker_id in self.worker_ids
        }

    @property
    def owned_indices(self) -> List[int]:
        """The indices of all particles advanced by this rank."""
        return self.partition.indices_of(self.comm.rank)

    def for_each_particle(self, swarm: Swarm, fn: Callable[[Particle, RandomStream], None]) -> None:
        """
        Apply a function to every particle owned by this rank's workers.

        Workers are processed in id order and each worker processes its block in index order.

        Parameters
        ----------
        swarm : swarmulate.population.Swarm
            The swarm.
        fn : Callable[[Particle, RandomStream], None]
            The function, called with the particle and the owning worker's random stream.
        """
        for worker_id in self.worker_ids:
            stream = self.streams[worker_id]
            for i in self.partition.blocks[worker_id]:
                fn(swarm[i], stream)

    def run_phase(self, name: str, work: Callable[[], Any], iteration: Optional[int] = None) -> Any:
        """
        Run one phase on this rank and wait for all other ranks to complete it.

        Only the class name and the message of an error are exchanged between ranks, so errors of any type can be
        propagated without being pickled.

        Parameters
        ----------
        name : str
            The phase name for logging.
        work : Callable[[], Any]
            The rank-local work of this phase.
        iteration : int, optional
            The current iteration for logging.

        Returns
        -------
        Any
            The return value of ``work``.

        Raises
        ------
        Exception
            The error raised by ``work`` on this rank.
        PhaseError
            If ``work`` succeeded on this rank but failed on another one. Names the first failing rank.
        """
        if log.isEnabledFor(logging.DEBUG):
            log.debug(f"Rank {self.comm.rank} Iteration {iteration}: {name.upper()} phase")
        result: Any = None
        summary: Optional[Tuple[str, str]] = None
        try:
            result = work()
        except Exception as e:
            error = e
            summary = (type(e).__name__, str(e))
        else:
            error = None
        # Closing collective doubles as the phase barrier.
        summaries = self.comm.allgather(summary)
        if error is not None:
            raise error
        for rank, remote in enumerate(summaries):
            if remote is not None:
                log.error(f"Rank {rank} failed in {name} phase: {remote[0]}: {remote[1]}")
                raise PhaseError(rank, name, *remote)
        return result

    def synchronize(self, swarm: Swarm) -> None:
        """
        Publish the state of owned particles to the replicas on all other ranks.

        Collective operation, must be called on all ranks of the communicator.

        Parameters
        ----------
        swarm : swarmulate.population.Swarm
            The local swarm replica.
        """
        if self.comm.size == 1:
            return
        own_states = {i: swarm[i].get_state() for i in self.owned_indices}
        for rank, states in enumerate(self.comm.allgather(own_states)):
            if rank == self.comm.rank:
                continue
            for i, state in states.items():
                swarm[i].set_state(state)
