"""
This file contains the worker-private random number source used by initialization and particle updates.
"""
import random


class RandomStream:
    """
    Uniform random number source owned by exactly one logical worker.

    Every worker gets its own stream seeded with ``base_seed + worker_id`` when the run is set up. Streams are never
    shared between workers and never reseeded, so no locking is required and a run is reproducible for a fixed base
    seed and a fixed number of workers. Changing the number of workers changes which particles draw from which
    stream and thus the trajectory.

    Attributes
    ----------
    worker_id : int
        The logical worker owning this stream.
    seed : int
        The seed the stream was created with.
    rng : random.Random
        The underlying Mersenne Twister generator.
    """

    def __init__(self, base_seed: int, worker_id: int) -> None:
        """
        Initialize the stream of one worker.

        Parameters
        ----------
        base_seed : int
            The process-level seed of the run.
        worker_id : int
            The logical worker id, used as offset to the base seed.
        """
        self.worker_id = worker_id
        self.seed = base_seed + worker_id
        self.rng = random.Random(self.seed)

    def random(self) -> float:
        """Draw from the half-open interval [0, 1)."""
        return self.rng.random()

    def uniform(self, low: float, high: float) -> float:
        """
        Draw uniformly from the interval between ``low`` and ``high``.

        Parameters
        ----------
        low : float
            The lower end of the interval.
        high : float
            The upper end of the interval.

        Returns
        -------
        float
            The random number.
        """
        return low + (high - low) * self.rng.random()

    def getstate(self) -> tuple:
        """Return the internal generator state, e.g., for comparing streams in tests."""
        return self.rng.getstate()

    def __repr__(self) -> str:
        return f"RandomStream(worker_id={self.worker_id}, seed={self.seed})"
