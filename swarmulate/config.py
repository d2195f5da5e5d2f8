"""
Run configuration of a swarm optimization.
"""
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Union

import numpy as np

from .errors import ConfigurationError
from .utils.benchmark_functions import get_function

Objective = Callable[[np.ndarray], float]


@dataclass
class RunConfig:
    """Parameters of one optimization run."""

    function: Union[str, Objective]  # Benchmark function name or callable
    dim: int
    swarm_size: int
    xmin: float
    xmax: float
    max_iter: int
    num_workers: int = 1
    inertia: float = 0.79
    c_cognitive: float = 1.49
    c_social: float = 1.49
    seed: int = 0

    @property
    def v_max(self) -> float:
        """The velocity bound, i.e., the width of the search domain."""
        return abs(self.xmax - self.xmin)

    def validate(self) -> Objective:
        """
        Check the configuration and resolve the objective function.

        Returns
        -------
        Callable
            The objective function.

        Raises
        ------
        ConfigurationError
            If the objective function is unknown or any parameter is out of range.
        """
        if self.dim < 1:
            raise ConfigurationError(f"Invalid dimension: {self.dim}")
        if self.swarm_size < 1:
            raise ConfigurationError(f"Invalid swarm size: {self.swarm_size}")
        if self.num_workers < 1:
            raise ConfigurationError(f"Invalid number of workers: {self.num_workers}")
        if not self.xmin < self.xmax:
            raise ConfigurationError(f"Invalid search domain: xmin={self.xmin} must be smaller than xmax={self.xmax}")
        if self.max_iter < 0:
            raise ConfigurationError(f"Invalid number of iterations: {self.max_iter}")

        if callable(self.function):
            return self.function
        return get_function(self.function, self.dim)

    def to_dict(self) -> Dict[str, Any]:
        config = asdict(self)
        if callable(self.function):
            config["function"] = getattr(self.function, "__name__", repr(self.function))
        return config
