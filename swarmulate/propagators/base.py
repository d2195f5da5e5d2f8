from typing import Callable, Tuple

import numpy as np

from ..errors import ConfigurationError, NumericalError
from ..population import Particle
from ..random_stream import RandomStream


class Propagator:
    """
    Abstract base class for all propagators, i.e., operators advancing the state of a single particle.

    A propagator modifies exactly one particle in place and only touches that particle's own fields. It is thus safe
    to apply propagators to different particles concurrently. Randomness is drawn from the random stream of the worker
    the particle belongs to.

    Attributes
    ----------
    loss_fn : Callable
        The objective function to be minimized.
    xmin : float
        The lower search-space limit in every dimension.
    xmax : float
        The upper search-space limit in every dimension.
    v_max : float
        The velocity limit in every dimension, i.e., the width of the search domain.

    Methods
    -------
    __call__()
        Apply the propagator.
    evaluate()
        Score a particle's current position.
    """

    def __init__(self, loss_fn: Callable[[np.ndarray], float], limits: Tuple[float, float]) -> None:
        """
        Initialize a propagator with given parameters.

        Parameters
        ----------
        loss_fn : Callable
            The objective function to be minimized.
        limits : Tuple[float, float]
            The search-space limits, applied to every dimension.

        Raises
        ------
        ConfigurationError
            If the search domain is empty.
        """
        xmin, xmax = limits
        if not xmin < xmax:
            raise ConfigurationError(f"Invalid search domain: xmin={xmin} must be smaller than xmax={xmax}")
        self.loss_fn = loss_fn
        self.xmin = float(xmin)
        self.xmax = float(xmax)
        self.v_max = abs(self.xmax - self.xmin)

    def evaluate(self, particle: Particle) -> float:
        """
        Score a particle's current position.

        Parameters
        ----------
        particle : swarmulate.population.Particle
            The particle to evaluate.

        Returns
        -------
        float
            The fitness at the particle's current position.

        Raises
        ------
        NumericalError
            If the objective function returns NaN or an infinite value.
        """
        fitness = float(self.loss_fn(particle.position))
        if not np.isfinite(fitness):
            raise NumericalError(particle.index, particle.position.copy(), fitness)
        return fitness

    def __call__(self, particle: Particle, stream: RandomStream) -> None:
        """
        Apply the propagator (not implemented for abstract base class).

        Parameters
        ----------
        particle : swarmulate.population.Particle
            The particle to modify in place.
        stream : swarmulate.random_stream.RandomStream
            The random stream of the worker owning the particle.

        Raises
        ------
        NotImplementedError
            Whenever called (abstract base class method).
        """
        raise NotImplementedError()
