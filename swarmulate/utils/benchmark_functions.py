"""Benchmark function module."""
import argparse
import logging
from typing import Callable, Dict, NamedTuple, Optional, Tuple

import numpy as np

from ..errors import ConfigurationError


def booth(x: np.ndarray) -> float:
    """
    Booth function: continuous, convex, non-separable, differentiable, unimodal.

    Input domain: -10 <= x, y <= 10
    Global minimum 0 at (x, y) = (1, 3)

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.

    Returns
    -------
    float
        The function value.
    """
    return float((x[0] + 2 * x[1] - 7) ** 2 + (2 * x[0] + x[1] - 5) ** 2)


def rastrigin(x: np.ndarray) -> float:
    """
    Rastrigin function: continuous, non-convex, separable, differentiable, multimodal.

    A non-linear and highly multimodal function. Its surface is determined by two external variables, controlling
    the modulation's amplitude and frequency. The local minima are located at a rectangular grid with size 1.
    Their functional values increase with the distance to the global minimum.

    Input domain: -5.12 <= x_i <= 5.12, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.

    Returns
    -------
    float
        The function value.
    """
    a = 10.0
    return float(a * len(x) + np.sum(x**2 - a * np.cos(2 * np.pi * x)))


def schwefel(x: np.ndarray) -> float:
    """
    Schwefel function: continuous, non-convex, separable, multimodal.

    This function has a second-best minimum far away from the global optimum.

    Input domain: -500 <= x_i <= 500, i = 1,...,N
    Global minimum 0 at (x_i)_N = (420.9687)_N

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.

    Returns
    -------
    float
        The function value.
    """
    v = 418.982887
    return float(v * len(x) - np.sum(x * np.sin(np.sqrt(np.abs(x)))))


def holder_table(x: np.ndarray) -> float:
    """
    Hölder table function: continuous, non-convex, non-separable, multimodal.

    Input domain: -10 <= x, y <= 10
    Four identical global minima -19.2085 at (x, y) = (+-8.05502, +-9.66459)

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.

    Returns
    -------
    float
        The function value.
    """
    return float(-np.abs(np.sin(x[0]) * np.cos(x[1]) * np.exp(np.abs(1 - np.sqrt(x[0] ** 2 + x[1] ** 2) / np.pi))))


def eggholder(x: np.ndarray) -> float:
    """
    Eggholder function: continuous, non-convex, non-separable, multimodal.

    The function has a large number of local minima.

    Input domain: -512 <= x, y <= 512
    Global minimum -959.6407 at (x, y) = (512, 404.2319)

    Parameters
    ----------
    x : numpy.ndarray
        The position to evaluate.

    Returns
    -------
    float
        The function value.
    """
    return float(
        -(x[1] + 47) * np.sin(np.sqrt(np.abs(x[0] / 2 + x[1] + 47)))
        - x[0] * np.sin(np.sqrt(np.abs(x[0] - (x[1] + 47))))
    )


def sphere(x: np.ndarray) -> float:
    """
    Sphere function: continuous, convex, separable, differentiable, unimodal.

    Input domain: -5.12 <= x_i <= 5.12, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N
    """
    return float(np.sum(x**2))


def rosenbrock(x: np.ndarray) -> float:
    """
    Rosenbrock function. This function has a narrow minimum inside a parabola-shaped valley.

    Input domain: -2.048 <= x_i <= 2.048, i = 1,...,N
    Global minimum 0 at (x_i)_N = (1)_N
    """
    return float(np.sum(100 * (x[1:] - x[:-1] ** 2) ** 2 + (1 - x[:-1]) ** 2))


def griewank(x: np.ndarray) -> float:
    """
    Griewank function.

    Griewank's product creates subpopulations strongly codependent to parallel GAs, while the summation produces a
    parabola. Its local optima lie above parabola level but decrease with increasing dimensions, i.e., the larger the
    search range, the flatter the function.

    Input domain: -600 <= x_i <= 600, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N
    """
    idx = np.arange(1, len(x) + 1)
    return float(1 + 1.0 / 4000 * np.sum(x**2) - np.prod(np.cos(x / np.sqrt(idx))))


def himmelblau(x: np.ndarray) -> float:
    """
    Himmelblau function: continuous, non-convex, non-separable, differentiable, multimodal.

    Input domain: -6 <= x, y <= 6
    Global minimum 0 at (x, y) = (3, 2)
    """
    return float((x[0] ** 2 + x[1] - 11) ** 2 + (x[0] + x[1] ** 2 - 7) ** 2)


class BenchmarkFunction(NamedTuple):
    """Registry entry of a benchmark function."""

    function: Callable[[np.ndarray], float]
    limits: Tuple[float, float]  # Default search domain per dimension
    dim: Optional[int] = None  # Required dimensionality, None for any


FUNCTIONS: Dict[str, BenchmarkFunction] = {
    "booth": BenchmarkFunction(booth, (-10.0, 10.0), 2),
    "rastrigin": BenchmarkFunction(rastrigin, (-5.12, 5.12)),
    "schwefel": BenchmarkFunction(schwefel, (-500.0, 500.0)),
    "holder_table": BenchmarkFunction(holder_table, (-10.0, 10.0), 2),
    "eggholder": BenchmarkFunction(eggholder, (-512.0, 512.0), 2),
    "sphere": BenchmarkFunction(sphere, (-5.12, 5.12)),
    "rosenbrock": BenchmarkFunction(rosenbrock, (-2.048, 2.048)),
    "griewank": BenchmarkFunction(griewank, (-600.0, 600.0)),
    "himmelblau": BenchmarkFunction(himmelblau, (-6.0, 6.0), 2),
}


def get_function(fname: str, dim: Optional[int] = None) -> Callable[[np.ndarray], float]:
    """
    Get a benchmark function by name.

    Parameters
    ----------
    fname : str
        The function name.
    dim : int, optional
        The dimensionality the function is going to be evaluated in. If given, it is checked against the function's
        required dimensionality.

    Returns
    -------
    Callable
        The callable function.

    Raises
    ------
    ConfigurationError
        If the function is unknown or does not support the requested dimensionality.
    """
    if fname not in FUNCTIONS:
        raise ConfigurationError(f"Function {fname} undefined. Choose from {', '.join(FUNCTIONS)}.")
    entry = FUNCTIONS[fname]
    if dim is not None and entry.dim is not None and dim != entry.dim:
        raise ConfigurationError(f"Function {fname} is only defined for dim={entry.dim}, got dim={dim}.")
    return entry.function


def get_function_search_space(fname: str) -> Tuple[Callable, Tuple[float, float], Optional[int]]:
    """
    Get function, default search-space limits and required dimensionality from function name.

    Parameters
    ----------
    fname : str
        The function name.

    Returns
    -------
    Callable
        The callable function.
    Tuple[float, float]
        The search-space limits per dimension.
    int | None
        The required dimensionality, None if the function accepts any.

    Raises
    ------
    ConfigurationError
        If the function is unknown.
    """
    function = get_function(fname)
    entry = FUNCTIONS[fname]
    return function, entry.limits, entry.dim


def parse_arguments(args: Optional[list] = None) -> argparse.Namespace:
    """
    Set up argument parser for swarm optimization of simple mathematical functions.

    Search-space limits default to the chosen function's domain.

    Parameters
    ----------
    args : list, optional
        The arguments to parse. Default is ``sys.argv``.

    Returns
    -------
    Namespace
        The namespace of all parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="Swarmulate example",
        description="Set up and run a parallel particle swarm optimization of mathematical functions.",
    )
    parser.add_argument("--function", type=str, choices=list(FUNCTIONS), default="booth")  # Function to optimize
    parser.add_argument("--dim", type=int, default=None)  # Dimensionality, defaults to 2
    parser.add_argument("--swarm_size", type=int, default=30)  # Number of particles
    parser.add_argument("--xmin", type=float, default=None)  # Lower search-space limit
    parser.add_argument("--xmax", type=float, default=None)  # Upper search-space limit
    parser.add_argument("--max_iter", type=int, default=200)  # Number of iterations
    parser.add_argument("--num_workers", type=int, default=4)  # Number of logical workers
    parser.add_argument("--seed", type=int, default=0)  # Base seed of the worker random streams
    parser.add_argument("--inertia", type=float, default=0.79)  # Inertia weight
    parser.add_argument("--cognitive", type=float, default=1.49)  # Cognitive factor
    parser.add_argument("--social", type=float, default=1.49)  # Social factor
    parser.add_argument("--logging_interval", type=int, default=10)
    parser.add_argument("--logging_level", type=int, default=logging.INFO)
    parser.add_argument("--log_file", type=str, default=None)

    config = parser.parse_args(args)
    _, limits, dim = get_function_search_space(config.function)
    if config.dim is None:
        config.dim = dim if dim is not None else 2
    if config.xmin is None:
        config.xmin = limits[0]
    if config.xmax is None:
        config.xmax = limits[1]
    return config
