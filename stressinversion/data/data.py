from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from ..geomeca.tensor_parameters import TensorParameters
from ..types import UnsupportedProblemTypeError, Vector3

if TYPE_CHECKING:
    from .description import DataArguments


class ProblemType(str, Enum):
    """Quantity a datum is compared with."""

    DYNAMIC = "dynamic"  # stress tensor
    KINEMATIC = "kinematic"  # displacement or strain, not supported yet


class FractureStrategy(str, Enum):
    """Misfit measure between a computed and an observed direction."""

    ANGLE = "angle"
    DOT = "dot"


@dataclass
class DataStatus:
    """Outcome of a data initialization.

    Attributes:
        status: False as soon as one error is recorded
        messages: Error messages, one per problem found
    """

    status: bool = True
    messages: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.status = False
        self.messages.append(message)

    def merge(self, other: "DataStatus") -> None:
        self.status = self.status and other.status
        self.messages.extend(other.messages)


class Data(ABC):
    """A field observation compared with stress hypotheses.

    A datum may span several lines of a data file (``nb_linked_data``). It is
    initialized once and its ``cost`` is then evaluated for every explored
    hypothesis, so all geometry is computed in ``initialize``.

    Args:
        weight: Relative influence of the datum
        active: Inactive data are skipped by parameter spaces
        position: Location of the observation in the geographic frame
        problem_type: Quantity the datum is compared with
    """

    nb_linked_data = 1

    def __init__(
        self,
        weight: float = 1.0,
        active: bool = True,
        position: Optional[Vector3] = None,
        problem_type: ProblemType = ProblemType.DYNAMIC,
    ):
        self.weight = weight
        self.active = active
        self.position = (
            np.zeros(3) if position is None else np.asarray(position, dtype=float)
        )
        self.problem_type = problem_type
        self.data_number: Optional[int] = None

    @abstractmethod
    def initialize(self, arguments: Sequence["DataArguments"]) -> DataStatus:
        """Read the parameters of the datum and compute its geometry.

        Args:
            arguments: One parsed line per linked data line

        Returns:
            Status holding every validation message
        """

    def check(self, stress: Optional[TensorParameters]) -> bool:
        """Whether the hypothesis can be evaluated for this datum."""
        self._ensure_supported()
        return stress is not None

    def cost(self, stress: TensorParameters) -> float:
        """Misfit between the datum and the stress hypothesis, always >= 0."""
        self._ensure_supported()
        return self.stress_cost(stress)

    @abstractmethod
    def stress_cost(self, stress: TensorParameters) -> float:
        """Misfit against a stress tensor hypothesis."""

    def predict(self, stress: TensorParameters):
        return None

    def _ensure_supported(self) -> None:
        if self.problem_type is not ProblemType.DYNAMIC:
            raise UnsupportedProblemTypeError(
                f"{type(self).__name__} does not support the {self.problem_type.value} problem type"
            )

    def _read_weight(self, arguments: "DataArguments") -> None:
        self.data_number = arguments.data_number
        weight = arguments.get_float(12, mandatory=False)
        if weight is not None:
            self.weight = weight
