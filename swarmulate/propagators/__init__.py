"""This package bundles all propagators, i.e., the operators advancing single particles."""

from .base import Propagator
from .init_uniform import InitUniform
from .update import UpdateEngine

__all__ = [
    "Propagator",
    "InitUniform",
    "UpdateEngine",
]
