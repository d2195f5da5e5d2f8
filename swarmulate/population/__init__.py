"""
This package bundles the data classes of the swarm, i.e., particles and the swarm holding them.
"""
__all__ = ["Particle", "Swarm"]
from .particle import Particle
from .swarm import Swarm
