from typing import Optional, Sequence

import numpy as np

from ..fault_helper import Fault, TypeOfMovement
from ..geomeca.tensor_parameters import TensorParameters
from ..tensor_math import EPS, clamp_unit
from .data import Data, DataStatus, FractureStrategy
from .description import DataArguments
from .readers import read_striated_plane


class StriatedPlaneKin(Data):
    """A striated fault plane compared with the resolved shear stress.

    Follows the Wallace-Bott hypothesis: the striation is parallel to the
    shear stress acting on the plane. When the type of movement is unknown the
    sense of the striation is not used.

    Args:
        strategy: Misfit measure between the shear stress and the striation
    """

    def __init__(self, strategy: FractureStrategy = FractureStrategy.ANGLE, **kwargs):
        super().__init__(**kwargs)
        self.strategy = strategy
        self.fault: Optional[Fault] = None
        self.oriented = True

    def initialize(self, arguments: Sequence[DataArguments]) -> DataStatus:
        args = arguments[0]
        self._read_weight(args)
        fault = read_striated_plane(args)
        if args.status.status:
            self.fault = fault
            self.oriented = args.get_movement(8) != TypeOfMovement.UND
        return args.status

    def _cos_angular_difference(self, stress: TensorParameters) -> float:
        n = self.fault.normal
        traction = stress.S @ n
        shear = traction - np.dot(n, traction) * n
        magnitude = np.linalg.norm(shear)
        if magnitude <= EPS:
            # No shear stress: the plane should not slip
            return -1.0
        return float(np.dot(shear / magnitude, self.fault.striation))

    def stress_cost(self, stress: TensorParameters) -> float:
        c = self._cos_angular_difference(stress)
        if not self.oriented:
            c = abs(c)
        if self.strategy == FractureStrategy.DOT:
            return 0.5 - c / 2
        return float(np.arccos(clamp_unit(c)))

    def predict(self, stress: TensorParameters) -> float:
        """Angular difference between the measured and calculated striations."""
        c = self._cos_angular_difference(stress)
        return float(np.arccos(clamp_unit(c if self.oriented else abs(c))))
