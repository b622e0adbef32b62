from typing import Protocol, TypeAlias, runtime_checkable
import numpy as np


# Type aliases for the numpy shapes used throughout the package
Vector3: TypeAlias = np.ndarray  # Shape: (3,), geographic frame (East, North, Up)
Matrix3x3: TypeAlias = np.ndarray  # Shape: (3, 3)


@runtime_checkable
class EngineProtocol(Protocol):
    """Protocol defining the interface of a stress tensor builder."""

    def set_hypothetical_stress(self, hrot: Matrix3x3, stress_ratio: float) -> None:
        """Store the rotation tensor and stress ratio of the current hypothesis."""
        ...

    def stress(self, position: Vector3):
        """Return the tensor parameters of the hypothesis at a point."""
        ...


class StressInversionError(Exception):
    """Base exception for stress inversion errors."""

    pass


class ValidationError(StressInversionError):
    """Raised when data parameters are missing, out of range or contradictory."""

    def __init__(self, message: str, messages: list[str] | None = None):
        super().__init__(message)
        self.messages = list(messages or [])


class GeometricConfigurationError(StressInversionError):
    """Raised when plane geometry is degenerate (identical or ambiguous planes)."""

    pass


class KinematicInconsistencyError(StressInversionError):
    """Raised when a declared type of movement contradicts the geometry."""

    pass


class InternalInvariantError(StressInversionError):
    """Raised when a numerical invariant of a misfit computation is broken."""

    pass


class SamplingConfigurationError(StressInversionError):
    """Raised when a domain is built with unusable axes."""

    pass


class UnsupportedProblemTypeError(StressInversionError):
    """Raised when a datum is evaluated with a problem type it does not support."""

    pass
