"""
This file contains the Swarm class, the fixed-size collection of particles.
"""
from typing import Iterator, List

import numpy as np

from .particle import Particle


class Swarm:
    """
    Ordered collection of a fixed number of particles.

    The size is set once at construction; particles are never added or removed during a run. Besides the particles,
    the swarm holds the index of the current global best particle as determined by the most recent reduction.

    Attributes
    ----------
    particles : List[swarmulate.population.Particle]
        The particles in index order.
    current_global_best_index : int
        The index of the global best particle as of the latest reduction, -1 before the first reduction.
    """

    def __init__(self, particles: List[Particle]) -> None:
        """
        Initialize a swarm from already allocated particles.

        Parameters
        ----------
        particles : List[swarmulate.population.Particle]
            The particles. Their ``index`` attribute is set to their position in the list.
        """
        for i, particle in enumerate(particles):
            particle.index = i
        self.particles = particles
        self.current_global_best_index = -1

    def __len__(self) -> int:
        return len(self.particles)

    def __getitem__(self, index: int) -> Particle:
        return self.particles[index]

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    @property
    def fitness(self) -> np.ndarray:
        """The personal best fitness of every particle in index order."""
        return np.array([p.fitness for p in self.particles])

    @property
    def best(self) -> Particle:
        """The particle at the current global best index."""
        if self.current_global_best_index < 0:
            raise RuntimeError("Global best has not been determined yet.")
        return self.particles[self.current_global_best_index]

    def broadcast(self, index: int) -> None:
        """
        Set the global best index of the swarm and of every particle.

        Parameters
        ----------
        index : int
            The new global best index.
        """
        self.current_global_best_index = index
        for particle in self.particles:
            particle.global_best_ref = index

    def release(self) -> None:
        """Release all particle buffers and empty the swarm."""
        for particle in self.particles:
            particle.release()
        self.particles = []
        self.current_global_best_index = -1

    def __repr__(self) -> str:
        return "\n\n".join(repr(p) for p in self.particles)
