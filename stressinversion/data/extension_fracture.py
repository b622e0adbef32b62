from typing import Optional, Sequence

import numpy as np

from ..fault_helper import Fault
from ..geomeca.tensor_parameters import TensorParameters
from ..tensor_math import clamp_unit
from .data import Data, DataStatus, FractureStrategy
from .description import DataArguments
from .readers import read_plane


class ExtensionFracture(Data):
    """Extension fracture (joint, vein, dyke) whose normal is parallel to sigma3."""

    def __init__(self, strategy: FractureStrategy = FractureStrategy.ANGLE, **kwargs):
        super().__init__(**kwargs)
        self.strategy = strategy
        self.fault: Optional[Fault] = None

    def initialize(self, arguments: Sequence[DataArguments]) -> DataStatus:
        args = arguments[0]
        self._read_weight(args)
        self.fault = read_plane(args)
        return args.status

    def stress_cost(self, stress: TensorParameters) -> float:
        # sigma3 is defined up to its sign
        dot = abs(float(np.dot(stress.S3_Y, self.fault.normal)))
        if self.strategy == FractureStrategy.DOT:
            return 1.0 - dot
        return float(np.arccos(clamp_unit(dot))) / np.pi


class DilationBand(ExtensionFracture):
    """Dilation band of a porous rock, opened perpendicular to sigma3."""
