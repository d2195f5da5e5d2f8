"""
This file contains the propagator that initializes particles uniformly within the search domain.
"""
from .base import Propagator
from ..population import Particle
from ..random_stream import RandomStream


class InitUniform(Propagator):
    """
    Initialize a particle by uniformly sampling position and velocity.

    Each position component is drawn from ``[xmin, xmax]``, each velocity component from ``[-v_max, v_max]``
    with ``v_max = |xmax - xmin|``. All position components are drawn before the velocity components. The personal
    best position is set to the initial position and the fitness to the objective value there.
    """

    def __call__(self, particle: Particle, stream: RandomStream) -> None:
        """
        Apply uniform-initialization propagator.

        Parameters
        ----------
        particle : swarmulate.population.Particle
            The freshly allocated particle to initialize in place.
        stream : swarmulate.random_stream.RandomStream
            The random stream of the worker owning the particle.
        """
        for j in range(particle.dim):
            particle.position[j] = stream.uniform(self.xmin, self.xmax)
        for j in range(particle.dim):
            particle.velocity[j] = stream.uniform(-self.v_max, self.v_max)
        particle.personal_best_position[:] = particle.position
        particle.fitness = self.evaluate(particle)
        particle.global_best_ref = -1
