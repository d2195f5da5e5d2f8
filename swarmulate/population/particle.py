"""
This file contains the Particle class, one candidate solution of the swarm.
"""
import numpy as np


class Particle:
    """
    One candidate solution of the swarm.

    A particle owns three fixed-length numpy buffers, i.e., its position, its velocity and the best position it has
    visited so far. The buffers are allocated once at construction and updated in place afterwards; they are never
    shared with other particles.

    Note that ``fitness`` is the best fitness this particle has ever attained, i.e., the fitness at
    ``personal_best_position``, not the fitness at the current position. It is therefore non-increasing over the
    particle's lifetime.

    Attributes
    ----------
    dim : int
        The dimensionality of the search domain.
    index : int
        The particle's index in the swarm.
    position : numpy.ndarray
        The current position.
    velocity : numpy.ndarray
        The current velocity.
    personal_best_position : numpy.ndarray
        The best position this particle has ever visited.
    fitness : float
        The best fitness this particle has ever attained.
    global_best_ref : int
        The swarm index of the particle regarded as global best in the current iteration.
    """

    def __init__(self, dim: int, index: int = -1) -> None:
        """
        Allocate a particle.

        Parameters
        ----------
        dim : int
            The dimensionality of the search domain.
        index : int, optional
            The particle's index in the swarm. Default is -1, i.e., not part of a swarm.
        """
        self._dim = dim
        self.index = index
        self.position = np.zeros(dim, dtype=np.float64)
        self.velocity = np.zeros(dim, dtype=np.float64)
        self.personal_best_position = np.zeros(dim, dtype=np.float64)
        self.fitness = np.inf
        self.global_best_ref = -1

    @property
    def dim(self) -> int:
        return self._dim

    def get_state(self) -> tuple:
        """
        Get a copy of the particle's mutable state.

        Returns
        -------
        tuple
            Position, velocity, personal best position and fitness.
        """
        return (
            self.position.copy(),
            self.velocity.copy(),
            self.personal_best_position.copy(),
            self.fitness,
        )

    def set_state(self, state: tuple) -> None:
        """
        Overwrite the particle's mutable state in place.

        Parameters
        ----------
        state : tuple
            Position, velocity, personal best position and fitness as returned by ``get_state``.
        """
        position, velocity, personal_best_position, fitness = state
        self.position[:] = position
        self.velocity[:] = velocity
        self.personal_best_position[:] = personal_best_position
        self.fitness = fitness

    def release(self) -> None:
        """Drop the particle's buffers."""
        self.position = None
        self.velocity = None
        self.personal_best_position = None

    def __repr__(self) -> str:
        return (
            f"Particle {self.index}:\n"
            f"position: {np.array2string(self.position, precision=2)}\n"
            f"velocity: {np.array2string(self.velocity, precision=2)}\n"
            f"pbest: {np.array2string(self.personal_best_position, precision=2)}\n"
            f"fitness: {self.fitness:.4f}\n"
            f"g: {self.global_best_ref}"
        )
