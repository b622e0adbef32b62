"""Samplers driving a parameter space over a grid or a random point set."""

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..logging_config import get_logger
from ..types import SamplingConfigurationError
from .parameter_space import ParameterSpace

logger = get_logger(__name__)


@dataclass
class Axis:
    """A sampled parameter.

    Attributes:
        name: Name of a parameter of the parameter space
        bounds: Lower and upper bound, both included in a grid
        n: Number of grid samples
    """

    name: str
    bounds: tuple[float, float]
    n: int = 2

    @property
    def lo(self) -> float:
        return self.bounds[0]

    @property
    def hi(self) -> float:
        return self.bounds[1]

    def values(self) -> np.ndarray:
        return np.linspace(self.lo, self.hi, self.n)


class Domain(ABC):
    """Evaluate the cost of a parameter space over sample points.

    Args:
        space: Parameter space whose parameters are set for every sample
        axes: Sampled parameters

    Raises:
        SamplingConfigurationError: If an axis does not name a parameter of
            the space
    """

    def __init__(self, space: ParameterSpace, axes: Sequence[Axis]):
        if not axes:
            raise SamplingConfigurationError("A domain needs at least one axis")
        for axis in axes:
            if not space.has_axis(axis.name):
                raise SamplingConfigurationError(
                    f"Axis '{axis.name}' is not a parameter of {type(space).__name__}, "
                    f"expected one of {list(space.axis_names)}"
                )
            if axis.hi < axis.lo:
                raise SamplingConfigurationError(
                    f"Axis '{axis.name}': upper bound {axis.hi} is lower than lower bound {axis.lo}"
                )
        self.space = space
        self.axes = list(axes)

    def _evaluate(self, point: Sequence[float]) -> float:
        for axis, value in zip(self.axes, point):
            self.space.try_set_axis(axis.name, value)
        return self.space.cost()

    @abstractmethod
    def run(self) -> np.ndarray:
        """Cost of every sample point."""


class GridDomain(Domain):
    """Regular grid, the first axis varying slowest.

    Raises:
        SamplingConfigurationError: If an axis has fewer than 2 samples
    """

    def __init__(self, space: ParameterSpace, axes: Sequence[Axis]):
        super().__init__(space, axes)
        for axis in self.axes:
            if axis.n < 2:
                raise SamplingConfigurationError(
                    f"Axis '{axis.name}' needs at least 2 samples, got {axis.n}"
                )

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(axis.n for axis in self.axes)

    def points(self):
        return itertools.product(*(axis.values() for axis in self.axes))

    def run(self) -> np.ndarray:
        logger.debug(
            "Grid over %s with shape %s",
            [axis.name for axis in self.axes],
            self.shape,
        )
        return np.array([self._evaluate(point) for point in self.points()])


class RandomDomain(Domain):
    """Uniform random samples within the bounds of every axis.

    The samples of the last run are kept in ``samples``, one column per axis.

    Args:
        space: Parameter space whose parameters are set for every sample
        axes: Sampled parameters, their sample count is ignored
        n: Number of sample points
    """

    def __init__(self, space: ParameterSpace, axes: Sequence[Axis], n: int):
        super().__init__(space, axes)
        if n < 1:
            raise SamplingConfigurationError(f"Number of random samples must be >= 1, got {n}")
        self.n = n
        self.samples: Optional[np.ndarray] = None

    def run(self) -> np.ndarray:
        self.samples = np.column_stack(
            [np.random.uniform(axis.lo, axis.hi, self.n) for axis in self.axes]
        )
        logger.debug("%d random samples over %s", self.n, [a.name for a in self.axes])
        return np.array([self._evaluate(point) for point in self.samples])

    def _coordinate(self, index: int) -> np.ndarray:
        if self.samples is None:
            raise SamplingConfigurationError("The domain has not been run yet")
        if index >= self.samples.shape[1]:
            raise SamplingConfigurationError(f"The domain has only {self.samples.shape[1]} axes")
        return self.samples[:, index]

    @property
    def x(self) -> np.ndarray:
        return self._coordinate(0)

    @property
    def y(self) -> np.ndarray:
        return self._coordinate(1)

    @property
    def z(self) -> np.ndarray:
        return self._coordinate(2)
