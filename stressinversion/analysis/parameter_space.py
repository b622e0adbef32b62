from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from ..data.data import Data
from ..geomeca.engine import HomogeneousEngine
from ..types import EngineProtocol, Matrix3x3, ValidationError


class ParameterSpace(ABC):
    """Named scalar parameters of a stress hypothesis, driven by domains.

    Subclasses list their parameters in ``axis_names`` and store them as
    float attributes of the same name.

    Args:
        data: Observations the hypotheses are compared with
        engine: Stress tensor builder, homogeneous by default
    """

    axis_names: tuple[str, ...] = ()

    def __init__(
        self,
        data: Sequence[Data] = (),
        engine: Optional[EngineProtocol] = None,
    ):
        self.data = list(data)
        self.engine = engine if engine is not None else HomogeneousEngine()

    def has_axis(self, name: str) -> bool:
        return name in self.axis_names

    def try_set_axis(self, name: str, value: float) -> bool:
        """Set a parameter, returning False if the space has no such parameter."""
        if not self.has_axis(name):
            return False
        setattr(self, name, float(value))
        return True

    def get_axis(self, name: str) -> float:
        if not self.has_axis(name):
            raise KeyError(f"{type(self).__name__} has no parameter named '{name}'")
        return getattr(self, name)

    def active_data(self) -> list[Data]:
        return [d for d in self.data if d.active]

    @abstractmethod
    def cost(self) -> float:
        """Misfit of the current hypothesis."""


class FullParameterSpace(ParameterSpace):
    """Orientation and shape of the stress tensor: Euler angles and stress ratio.

    The Euler angles (psi, theta, phi), in degrees, are intrinsic rotations
    around Z, X and Z applied to the geographic frame; the rotated frame is the
    principal frame (sigma1, sigma3, sigma2).
    """

    axis_names = ("psi", "theta", "phi", "R")

    def __init__(
        self,
        data: Sequence[Data] = (),
        engine: Optional[EngineProtocol] = None,
    ):
        super().__init__(data, engine)
        self.psi = 0.0
        self.theta = 0.0
        self.phi = 0.0
        self.R = 0.5

    def wrot(self) -> Matrix3x3:
        """Rotation tensor whose rows are the principal directions."""
        rotation = Rotation.from_euler(
            "ZXZ", [self.psi, self.theta, self.phi], degrees=True
        )
        return rotation.as_matrix().T

    def cost(self) -> float:
        """Mean misfit of the active data.

        The weights of the data are not applied.

        Raises:
            ValidationError: If there is no active data
        """
        data = self.active_data()
        if not data:
            raise ValidationError("No active data to compute the misfit")
        self.engine.set_hypothetical_stress(self.wrot(), self.R)
        return float(
            np.mean([d.cost(stress=self.engine.stress(d.position)) for d in data])
        )
