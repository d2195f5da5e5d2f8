"""Minimum working example showing how to use Swarmulate."""

import numpy as np
from mpi4py import MPI

import swarmulate

comm = MPI.COMM_WORLD
swarmulate.set_logger_config()


# Define the function to minimize, e.g., a 3D sphere function on (-5.12, 5.12)^3.
def loss_fn(x: np.ndarray) -> float:
    """Loss function to minimize."""
    return float(np.sum(x**2))


config = swarmulate.RunConfig(
    function=loss_fn,
    dim=3,
    swarm_size=20,
    xmin=-5.12,
    xmax=5.12,
    max_iter=100,
    num_workers=4,
    seed=42,
)

# Run optimization and get the best particle.
result = swarmulate.optimize(config, comm)
if comm.rank == 0:
    print(f"Best fitness {result.fitness} at personal best position {result.personal_best_position}.")
