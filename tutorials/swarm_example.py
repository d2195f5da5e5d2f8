"""
This file contains an example use case for the parallel swarm optimizer. Here, you can choose between benchmark
functions and optimize them, e.g., with ``mpirun -n 2 python swarm_example.py --function booth --num_workers 4``.
"""
import logging
import sys

from mpi4py import MPI

from swarmulate import (
    ConfigurationError,
    NumericalError,
    PhaseError,
    ResourceError,
    RunConfig,
    optimize,
    set_logger_config,
)
from swarmulate.utils.benchmark_functions import parse_arguments

log = logging.getLogger("swarmulate")

if __name__ == "__main__":
    comm = MPI.COMM_WORLD

    if comm.rank == 0:
        print(
            "###########################################\n"
            "# SWARMULATE: Parallel swarm optimization #\n"
            "###########################################\n"
        )

    args = parse_arguments()

    # Set up separate logger for the optimization.
    set_logger_config(
        level=args.logging_level,  # Logging level
        log_file=args.log_file,  # Logging path
        log_to_stdout=True,  # Print log on stdout.
        log_rank=False,  # Do not prepend MPI rank to logging messages.
        colors=True,  # Use colors.
    )

    config = RunConfig(
        function=args.function,
        dim=args.dim,
        swarm_size=args.swarm_size,
        xmin=args.xmin,
        xmax=args.xmax,
        max_iter=args.max_iter,
        num_workers=args.num_workers,
        inertia=args.inertia,
        c_cognitive=args.cognitive,
        c_social=args.social,
        seed=args.seed,
    )
    try:
        result = optimize(config, comm, logging_interval=args.logging_interval)
    except ConfigurationError as e:
        if comm.rank == 0:
            log.error(f"Unable to initialize PSO: {e}")
        sys.exit(1)
    except (NumericalError, ResourceError, PhaseError) as e:
        log.error(f"Rank {comm.rank}: optimization aborted with {type(e).__name__}: {e}")
        sys.exit(1)

    if comm.rank == 0:
        print(
            f"Best fitness {result.fitness} at personal best position {result.personal_best_position} "
            f"after {result.iterations} iterations."
        )
