"""
This file contains the inertia-weight PSO update step applied to every particle in every iteration.
"""
from typing import Callable, Tuple

import numpy as np

from .base import Propagator
from ..population import Particle
from ..random_stream import RandomStream


class UpdateEngine(Propagator):
    """
    This propagator implements the inertia-weight PSO update with resampling velocity clamping.

    For each dimension ``j``, two random numbers ``r1`` and ``r2`` are drawn from [0, 1) and the velocity is updated
    as ``w * v + c1 * r1 * (pbest - x) + c2 * r2 * (gbest - x)``. A velocity component leaving
    ``[-v_max, v_max]`` is not cut off at the border but replaced by a fresh uniform sample from that interval.
    The position is advanced by the velocity and then clipped to the search domain.

    After all dimensions are updated, the new position is scored. Only a strictly better fitness replaces the
    particle's personal best.

    This variant was first proposed in Y. Shi and R. Eberhart. “A modified particle swarm optimizer”, 1998,
    https://doi.org/10.1109/ICEC.1998.699146
    """

    def __init__(
        self,
        loss_fn: Callable[[np.ndarray], float],
        limits: Tuple[float, float],
        inertia: float = 0.79,
        c_cognitive: float = 1.49,
        c_social: float = 1.49,
    ) -> None:
        """
        The class constructor.

        Parameters
        ----------
        loss_fn : Callable
            The objective function to be minimized.
        limits : Tuple[float, float]
            The search-space limits, applied to every dimension.
        inertia : float
            The inertia weight.
        c_cognitive : float
            Constant cognitive factor to scale the distance to the particle's personal best position with.
        c_social : float
            Constant social factor to scale the distance to the swarm's global best position with.
        """
        super().__init__(loss_fn, limits)
        self.inertia = inertia
        self.c_cognitive = c_cognitive
        self.c_social = c_social

    def __call__(self, particle: Particle, stream: RandomStream, global_best_position: np.ndarray) -> None:
        """
        Advance one particle by one iteration in place.

        Parameters
        ----------
        particle : swarmulate.population.Particle
            The particle to update.
        stream : swarmulate.random_stream.RandomStream
            The random stream of the worker owning the particle.
        global_best_position : numpy.ndarray
            The position of the global best particle as of the start of the current iteration. Must not alias a buffer
            that is modified during the update phase.
        """
        x = particle.position
        v = particle.velocity
        p_best = particle.personal_best_position
        for j in range(particle.dim):
            r1 = stream.random()
            r2 = stream.random()
            v[j] = (
                self.inertia * v[j]
                + self.c_cognitive * r1 * (p_best[j] - x[j])
                + self.c_social * r2 * (global_best_position[j] - x[j])
            )
            if v[j] < -self.v_max or v[j] > self.v_max:
                v[j] = stream.uniform(-self.v_max, self.v_max)

            x[j] = x[j] + v[j]
            if x[j] > self.xmax:
                x[j] = self.xmax
            if x[j] < self.xmin:
                x[j] = self.xmin

        fitness = self.evaluate(particle)
        if fitness < particle.fitness:
            particle.fitness = fitness
            p_best[:] = x
