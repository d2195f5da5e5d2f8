"""Exceptions raised by Swarmulate."""


class ConfigurationError(ValueError):
    """
    Invalid run configuration.

    Raised before any particle state is created, e.g., for an unknown objective function, a non-positive dimension,
    swarm size or worker count, or an empty search domain.
    """


class ResourceError(MemoryError):
    """
    Allocation of the swarm failed.

    Any particles constructed up to the failure are released before this error propagates.
    """


class NumericalError(ArithmeticError):
    """
    The objective function returned a non-finite value.

    Attributes
    ----------
    index : int
        The swarm index of the particle that was evaluated.
    position : numpy.ndarray
        The position the objective function was evaluated at.
    value : float
        The offending function value.
    """

    def __init__(self, index: int, position, value: float) -> None:
        super().__init__(f"Objective function returned {value} for particle {index} at position {position}.")
        self.index = index
        self.position = position
        self.value = value


class PhaseError(RuntimeError):
    """
    Another rank failed within a phase of the run.

    Raised on the ranks that completed the phase themselves. The rank that failed raises its own error instead.

    Attributes
    ----------
    rank : int
        The first rank that failed.
    phase : str
        The name of the phase.
    error_type : str
        The class name of the error raised on the failing rank.
    message : str
        The message of the error raised on the failing rank.
    """

    def __init__(self, rank: int, phase: str, error_type: str, message: str) -> None:
        super().__init__(f"Rank {rank} failed in {phase} phase with {error_type}: {message}")
        self.rank = rank
        self.phase = phase
        self.error_type = error_type
        self.message = message
