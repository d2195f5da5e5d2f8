from importlib.metadata import PackageNotFoundError, version

try:
    # Change here if project is renamed and does not equal the package name
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

from . import propagators
from .config import RunConfig
from .controller import IterationController, OptimizationResult, optimize
from .errors import ConfigurationError, NumericalError, PhaseError, ResourceError
from .initializer import SwarmInitializer
from .partition import Partition
from .population import Particle, Swarm
from .random_stream import RandomStream
from .reducer import GlobalBestReducer
from .utils import set_logger_config
from .workers import WorkerPool

__all__ = [
    "ConfigurationError",
    "GlobalBestReducer",
    "IterationController",
    "NumericalError",
    "OptimizationResult",
    "Particle",
    "Partition",
    "PhaseError",
    "RandomStream",
    "ResourceError",
    "RunConfig",
    "Swarm",
    "SwarmInitializer",
    "WorkerPool",
    "optimize",
    "set_logger_config",
    "propagators",
]
