"""Search of the stress tensor minimizing the misfit of a data set."""

from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, Union

import numpy as np

from .config import MonteCarloConfig
from .data.data import Data
from .geomeca.engine import HomogeneousEngine
from .logging_config import get_logger
from .tensor_math import (
    SphericalCoords,
    deg2rad,
    rotation_tensor_from_axis_angle,
    spherical_to_unit_vector,
)
from .types import EngineProtocol, Matrix3x3, ValidationError

logger = get_logger(__name__)


@dataclass
class MisfitSolution:
    """Best hypothesis found by a search.

    Attributes:
        misfit: Mean misfit of the data
        rotation_matrix_w: Rotation tensor from the geographic to the principal frame
        rotation_matrix_d: Rotation from the reference to the principal frame
        stress_ratio: Stress ratio R
        stress_tensor: Normalized stress tensor in the geographic frame
    """

    misfit: float = np.inf
    rotation_matrix_w: Matrix3x3 = field(default_factory=lambda: np.eye(3))
    rotation_matrix_d: Matrix3x3 = field(default_factory=lambda: np.eye(3))
    stress_ratio: float = 0.0
    stress_tensor: Matrix3x3 = field(default_factory=lambda: np.eye(3))

    def copy(self) -> "MisfitSolution":
        return MisfitSolution(
            misfit=self.misfit,
            rotation_matrix_w=self.rotation_matrix_w.copy(),
            rotation_matrix_d=self.rotation_matrix_d.copy(),
            stress_ratio=self.stress_ratio,
            stress_tensor=self.stress_tensor.copy(),
        )


class SearchMethod(Protocol):
    def run(self, data: Sequence[Data], solution: MisfitSolution) -> MisfitSolution:
        ...


def mean_cost(data: Sequence[Data], engine: EngineProtocol) -> float:
    """Mean misfit of the active data for the current hypothesis of ``engine``.

    Raises:
        ValidationError: If no datum is active
    """
    active = [d for d in data if d.active]
    if not active:
        raise ValidationError("No active data to compute the misfit")
    return float(np.mean([d.cost(stress=engine.stress(d.position)) for d in active]))


class MonteCarlo:
    """Random rotations and stress ratios around a reference solution.

    Each trial rotates the reference frame around an axis drawn uniformly on
    the sphere, by an angle drawn in [0, half interval], and draws the stress
    ratio within its half interval constrained to [0, 1].

    Args:
        config: Search configuration
        rrot: Rotation tensor of the reference solution, identity by default
        engine: Stress tensor builder
    """

    def __init__(
        self,
        config: Optional[MonteCarloConfig] = None,
        rrot: Optional[Matrix3x3] = None,
        engine: Optional[EngineProtocol] = None,
    ):
        self.config = config if config is not None else MonteCarloConfig()
        self.rrot = np.eye(3) if rrot is None else np.asarray(rrot, dtype=float)
        self.stress_ratio0 = self.config.stress_ratio
        self.engine = engine if engine is not None else HomogeneousEngine()

    def set_interactive_solution(self, rot: Matrix3x3, stress_ratio: float) -> None:
        self.rrot = np.asarray(rot, dtype=float)
        self.stress_ratio0 = stress_ratio

    def run(self, data: Sequence[Data], solution: MisfitSolution) -> MisfitSolution:
        half = self.config.stress_ratio_half_interval
        ratio_min = max(0.0, abs(self.stress_ratio0) - half)
        ratio_max = min(1.0, abs(self.stress_ratio0) + half)
        max_angle = deg2rad(self.config.rot_angle_half_interval)

        logger.info(
            "Starting the Monte Carlo search: %d trials, R in [%g, %g]",
            self.config.nb_random_trials,
            ratio_min,
            ratio_max,
        )

        best = solution.copy()
        for trial in range(self.config.nb_random_trials):
            # arccos gives a uniform distribution of axes on the sphere
            axis = spherical_to_unit_vector(
                SphericalCoords(
                    phi=np.random.uniform(0.0, 2 * np.pi),
                    theta=np.arccos(2 * np.random.uniform() - 1),
                )
            )
            angle = np.random.uniform() * max_angle
            drot = rotation_tensor_from_axis_angle(axis, angle)
            wrot = drot @ self.rrot
            stress_ratio = ratio_min + np.random.uniform() * (ratio_max - ratio_min)

            self.engine.set_hypothetical_stress(wrot, stress_ratio)
            misfit = mean_cost(data, self.engine)
            if misfit < best.misfit:
                best = MisfitSolution(
                    misfit=misfit,
                    rotation_matrix_w=wrot,
                    rotation_matrix_d=drot,
                    stress_ratio=stress_ratio,
                    stress_tensor=self.engine.stress(np.zeros(3)).S.copy(),
                )
                logger.debug("Trial %d: misfit %.6f, R %.3f", trial, misfit, stress_ratio)

        logger.info("Monte Carlo search done: misfit %.6f", best.misfit)
        return best


class InverseMethod:
    """Collect data and run a search method on them."""

    def __init__(self, search_method: Optional[SearchMethod] = None):
        self.search_method = search_method if search_method is not None else MonteCarlo()
        self.solution = MisfitSolution()
        self._data: list[Data] = []

    @property
    def data(self) -> list[Data]:
        return self._data

    def set_search_method(self, search_method: SearchMethod) -> None:
        self.search_method = search_method

    def add_data(self, data: Union[Data, Sequence[Data]]) -> None:
        if isinstance(data, Data):
            self._data.append(data)
        else:
            self._data.extend(data)

    def run(self, reset: bool = True) -> MisfitSolution:
        """Run the search, starting over unless ``reset`` is False.

        Raises:
            ValidationError: If no data was added or none is active
        """
        if not self._data:
            raise ValidationError("No data provided")
        if reset:
            self.solution = MisfitSolution()
        self.solution = self.search_method.run(self._data, self.solution)
        return self.solution

    def cost(self, stress) -> float:
        """Mean misfit of the active data for a tensor hypothesis.

        Raises:
            ValidationError: If no datum is active
        """
        active = [d for d in self._data if d.active]
        if not active:
            raise ValidationError("No active data to compute the misfit")
        return float(np.mean([d.cost(stress=stress) for d in active]))
