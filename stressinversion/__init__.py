"""Stress tensor inversion from fault and focal mechanism data."""

from .types import (
    GeometricConfigurationError,
    InternalInvariantError,
    KinematicInconsistencyError,
    SamplingConfigurationError,
    StressInversionError,
    UnsupportedProblemTypeError,
    ValidationError,
)
from .fault_helper import Direction, Fault, TypeOfMovement

__version__ = "0.1.0"

__all__ = [
    "StressInversionError",
    "ValidationError",
    "GeometricConfigurationError",
    "KinematicInconsistencyError",
    "InternalInvariantError",
    "SamplingConfigurationError",
    "UnsupportedProblemTypeError",
    "Direction",
    "Fault",
    "TypeOfMovement",
]
