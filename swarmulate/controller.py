import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from mpi4py import MPI

from .config import RunConfig
from .initializer import SwarmInitializer
from .partition import Partition
from .population import Swarm
from .propagators import UpdateEngine
from .reducer import GlobalBestReducer
from .workers import WorkerPool

log = logging.getLogger(__name__)  # Get logger instance.


@dataclass
class OptimizationResult:
    """Best particle found by a run."""

    index: int
    position: np.ndarray
    personal_best_position: np.ndarray
    fitness: float
    iterations: int


class IterationController:
    """
    Parallel particle swarm optimization with a fixed number of synchronous iterations.

    The swarm is partitioned into contiguous blocks, one per logical worker, and the workers are distributed over the
    ranks of the communicator. Each iteration consists of three phases separated by barriers:

    1. Update: every worker advances its particles with the ``UpdateEngine``, reading the global best as broadcast at
       the end of the previous iteration.
    2. Reduce: the ``GlobalBestReducer`` determines the new global best index from the particles' fitness values.
    3. Broadcast: the new index is written to every particle.

    The loop runs for exactly ``max_iter`` iterations without any convergence check.

    Attributes
    ----------
    config : swarmulate.config.RunConfig
        The run configuration.
    comm : MPI.Comm
        The communicator of the ranks executing the workers.
    partition : swarmulate.partition.Partition
        The partition of the swarm over the workers.
    workers : swarmulate.workers.WorkerPool
        The workers hosted by this rank.
    update_engine : swarmulate.propagators.UpdateEngine
        The per-particle update step.
    reducer : swarmulate.reducer.GlobalBestReducer
        The global best reduction.
    initializer : swarmulate.initializer.SwarmInitializer
        The construction of the initial swarm.
    swarm : swarmulate.population.Swarm
        The local swarm replica, None before initialization and after release.
    iteration : int
        The number of completed iterations.

    Methods
    -------
    initialize()
        Build the initial swarm.
    step()
        Run one iteration.
    run()
        Run the complete optimization.
    release()
        Release the swarm.
    """

    def __init__(self, config: RunConfig, comm: MPI.Comm = MPI.COMM_WORLD) -> None:
        """
        Set up the run.

        Parameters
        ----------
        config : swarmulate.config.RunConfig
            The run configuration.
        comm : MPI.Comm, optional
            The communicator of the ranks executing the workers. Default is ``MPI.COMM_WORLD``.

        Raises
        ------
        ConfigurationError
            If the configuration is invalid. No particle has been created in that case.
        """
        loss_fn = config.validate()
        self.config = config
        self.comm = comm
        self.partition = Partition(config.swarm_size, config.num_workers, comm.size)
        self.workers = WorkerPool(self.partition, config.seed, comm)
        self.update_engine = UpdateEngine(
            loss_fn,
            (config.xmin, config.xmax),
            inertia=config.inertia,
            c_cognitive=config.c_cognitive,
            c_social=config.c_social,
        )
        self.reducer = GlobalBestReducer(self.partition, comm)
        self.initializer = SwarmInitializer(config, self.workers, self.reducer)
        self.swarm: Optional[Swarm] = None
        self.iteration = 0

        if self.comm.rank == 0:
            log.info(
                f"Running {self.config.num_workers} workers on {self.comm.size} ranks: {self.partition}\n"
                f"Configuration: {self.config.to_dict()}"
            )

    def initialize(self) -> Swarm:
        """Build the initial swarm. Collective operation."""
        self.swarm = self.initializer()
        self.iteration = 0
        return self.swarm

    def step(self) -> int:
        """
        Run one iteration, i.e., the update, reduce and broadcast phases.

        Collective operation, must be called on all ranks of the communicator.

        Returns
        -------
        int
            The new global best index.
        """
        swarm = self.swarm
        if swarm is None:
            raise RuntimeError("Swarm not initialized.")

        # Snapshot, since the global best particle itself may be advanced during the update phase.
        global_best_position = swarm[swarm.current_global_best_index].position.copy()

        def update() -> None:
            self.workers.for_each_particle(
                swarm, lambda particle, stream: self.update_engine(particle, stream, global_best_position)
            )

        self.workers.run_phase("update", update, self.iteration)
        self.workers.synchronize(swarm)
        index = self.workers.run_phase("reduce", lambda: self.reducer(swarm), self.iteration)
        self.workers.run_phase("broadcast", lambda: swarm.broadcast(index), self.iteration)
        self.iteration += 1
        return index

    def run(
        self,
        logging_interval: int = 10,
        callback: Optional[Callable[[int, Swarm], None]] = None,
    ) -> OptimizationResult:
        """
        Run the complete optimization.

        Parameters
        ----------
        logging_interval : int, optional
            Log the current best particle every this many iterations on rank 0. Default is 10.
        callback : Callable[[int, Swarm], None], optional
            Called on every rank after initialization (with iteration 0) and after each iteration with the number of
            completed iterations and the swarm.

        Returns
        -------
        OptimizationResult
            The best particle after ``max_iter`` iterations.
        """
        if self.swarm is None:
            self.initialize()
        if callback is not None:
            callback(self.iteration, self.swarm)

        while self.iteration < self.config.max_iter:
            self.step()
            if callback is not None:
                callback(self.iteration, self.swarm)
            if self.comm.rank == 0:
                if logging_interval > 0 and self.iteration % logging_interval == 0:
                    log.info(
                        f"Iteration {self.iteration}: best fitness {self.swarm.best.fitness:.6g} "
                        f"(particle {self.swarm.current_global_best_index})"
                    )
                if log.isEnabledFor(logging.DEBUG):
                    log.debug(f"Iteration {self.iteration}:\n{self.swarm.best}")

        best = self.swarm.best
        if self.comm.rank == 0:
            log.info(f"OPTIMIZATION DONE.\nSolution:\n{best}")
        return OptimizationResult(
            index=best.index,
            position=best.position.copy(),
            personal_best_position=best.personal_best_position.copy(),
            fitness=best.fitness,
            iterations=self.iteration,
        )

    def release(self) -> None:
        """Release the swarm."""
        if self.swarm is not None:
            self.swarm.release()
            self.swarm = None


def optimize(
    config: RunConfig,
    comm: MPI.Comm = MPI.COMM_WORLD,
    logging_interval: int = 10,
    callback: Optional[Callable[[int, Swarm], None]] = None,
) -> OptimizationResult:
    """
    Run a parallel particle swarm optimization and release the swarm afterwards.

    Parameters
    ----------
    config : swarmulate.config.RunConfig
        The run configuration.
    comm : MPI.Comm, optional
        The communicator of the ranks executing the workers. Default is ``MPI.COMM_WORLD``.
    logging_interval : int, optional
        Log the current best particle every this many iterations on rank 0. Default is 10.
    callback : Callable[[int, Swarm], None], optional
        Per-iteration callback, see ``IterationController.run``.

    Returns
    -------
    OptimizationResult
        The best particle after ``config.max_iter`` iterations.
    """
    controller = IterationController(config, comm)
    try:
        return controller.run(logging_interval=logging_interval, callback=callback)
    finally:
        controller.release()
