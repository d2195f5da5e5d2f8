"""
This file contains the construction of the initial swarm.
"""
import logging
from typing import List

from .config import RunConfig
from .errors import ResourceError
from .population import Particle, Swarm
from .propagators import InitUniform
from .reducer import GlobalBestReducer
from .workers import WorkerPool

log = logging.getLogger(__name__)


class SwarmInitializer:
    """
    Build the initial swarm of a run.

    The configuration is validated and the objective function resolved in the constructor, i.e., before any particle is
    allocated. Calling the initializer allocates all particles, initializes the owned ones uniformly at random with
    the owning worker's stream, synchronizes the replicas and determines and broadcasts the initial global best.

    Attributes
    ----------
    config : swarmulate.config.RunConfig
        The run configuration.
    propagator : swarmulate.propagators.InitUniform
        The per-particle initialization.
    workers : swarmulate.workers.WorkerPool
        The workers hosted by this rank.
    reducer : swarmulate.reducer.GlobalBestReducer
        The global best reduction.
    """

    def __init__(self, config: RunConfig, workers: WorkerPool, reducer: GlobalBestReducer) -> None:
        """
        Set up the initializer.

        Parameters
        ----------
        config : swarmulate.config.RunConfig
            The run configuration.
        workers : swarmulate.workers.WorkerPool
            The workers hosted by this rank.
        reducer : swarmulate.reducer.GlobalBestReducer
            The global best reduction.

        Raises
        ------
        ConfigurationError
            If the configuration is invalid.
        """
        loss_fn = config.validate()
        self.config = config
        self.propagator = InitUniform(loss_fn, (config.xmin, config.xmax))
        self.workers = workers
        self.reducer = reducer

    def _allocate(self) -> Swarm:
        particles: List[Particle] = []
        try:
            for _ in range(self.config.swarm_size):
                particles.append(Particle(self.config.dim))
        except MemoryError as e:
            for particle in particles:
                particle.release()
            particles.clear()
            raise ResourceError(
                f"Could not allocate swarm of {self.config.swarm_size} particles with dim={self.config.dim}."
            ) from e
        return Swarm(particles)

    def __call__(self) -> Swarm:
        """
        Build and initialize the swarm.

        Collective operation, must be called on all ranks of the communicator.

        Returns
        -------
        swarmulate.population.Swarm
            The initialized swarm with the global best broadcast to all particles.
        """
        swarm = self.workers.run_phase("allocate", self._allocate, iteration=-1)
        try:
            self.workers.run_phase(
                "init", lambda: self.workers.for_each_particle(swarm, self.propagator), iteration=-1
            )
            self.workers.synchronize(swarm)
            index = self.workers.run_phase("reduce", lambda: self.reducer(swarm), iteration=-1)
            self.workers.run_phase("broadcast", lambda: swarm.broadcast(index), iteration=-1)
        except Exception:
            swarm.release()
            raise
        if log.isEnabledFor(logging.DEBUG):
            log.debug(f"Initial swarm:\n{swarm}")
        return swarm
