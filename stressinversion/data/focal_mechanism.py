from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..geomeca.tensor_parameters import TensorParameters
from ..logging_config import get_logger
from ..tensor_math import EPS, clamp_unit, deg2rad
from ..types import Vector3
from .data import Data, DataStatus, FractureStrategy
from .description import DataArguments

logger = get_logger(__name__)


@dataclass
class NodalPlane:
    """A nodal plane and the slip vector of its hanging wall.

    Attributes:
        normal: Upward unit normal
        rake_vector: Unit slip vector lying in the plane
    """

    normal: Vector3
    rake_vector: Vector3


def nodal_plane(strike: float, dip: float, rake: float) -> NodalPlane:
    """Build a nodal plane from seismological angles in degrees.

    The plane dips toward strike + 90 and the rake is measured in the plane
    from the strike direction, positive upward.
    """
    s = deg2rad(strike)
    phi = 2 * np.pi - s
    theta = deg2rad(dip)
    r = deg2rad(rake)

    normal = np.array(
        [np.sin(theta) * np.cos(phi), np.sin(theta) * np.sin(phi), np.cos(theta)]
    )
    strike_vector = np.array([np.sin(s), np.cos(s), 0.0])
    updip_vector = np.array(
        [-np.cos(theta) * np.cos(phi), -np.cos(theta) * np.sin(phi), np.sin(theta)]
    )
    rake_vector = np.cos(r) * strike_vector + np.sin(r) * updip_vector
    return NodalPlane(normal=normal, rake_vector=rake_vector)


def auxiliary_plane(plane: NodalPlane) -> NodalPlane:
    """The second nodal plane, swapping normal and slip vector.

    The derived normal is taken in the upper hemisphere.
    """
    if plane.rake_vector[2] >= 0:
        return NodalPlane(normal=plane.rake_vector.copy(), rake_vector=plane.normal.copy())
    return NodalPlane(normal=-plane.rake_vector, rake_vector=-plane.normal)


class FocalMechanismKin(Data):
    """Earthquake focal mechanism.

    Columns 7 to 9 hold the strike, dip and rake of the first nodal plane and
    columns 10 to 12 those of the optional second nodal plane. As the fault
    plane is not known, the misfit is the smallest one over the two nodal
    planes, each being compared with the shear stress resolved on it.

    Args:
        strategy: Misfit measure between the shear stress and the slip vector
    """

    def __init__(self, strategy: FractureStrategy = FractureStrategy.ANGLE, **kwargs):
        super().__init__(**kwargs)
        self.strategy = strategy
        self.planes: list[NodalPlane] = []

    def initialize(self, arguments: Sequence[DataArguments]) -> DataStatus:
        args = arguments[0]
        status = args.status
        self.data_number = args.data_number
        weight = args.get_float(15, mandatory=False, low=0.0)
        if weight is not None:
            self.weight = weight

        first = self._read_nodal_plane(args, 7)
        second = None
        defined = [args.is_defined(i) for i in (10, 11, 12)]
        if all(defined):
            second = self._read_nodal_plane(args, 10)
        elif any(defined):
            args.error(
                10,
                "strike, dip and rake are not completely specified for nodal plane 2",
            )
        if not status.status:
            return status

        self.planes = [first, second if second is not None else auxiliary_plane(first)]
        logger.debug(
            "Focal mechanism %s: normals %s and %s",
            self.data_number,
            self.planes[0].normal,
            self.planes[1].normal,
        )
        return status

    @staticmethod
    def _read_nodal_plane(
        args: DataArguments, first_column: int
    ) -> Optional[NodalPlane]:
        strike = args.get_float(first_column, low=0.0, high=360.0, high_open=True)
        dip = args.get_float(first_column + 1, low=0.0, high=90.0)
        rake = args.get_float(first_column + 2, low=-180.0, high=180.0)
        if strike is None or dip is None or rake is None:
            return None
        return nodal_plane(strike, dip, rake)

    def stress_cost(self, stress: TensorParameters) -> float:
        best_cos = -1.0
        for plane in self.planes:
            traction = stress.S @ plane.normal
            shear = traction - np.dot(plane.normal, traction) * plane.normal
            magnitude = np.linalg.norm(shear)
            if magnitude > EPS:
                # Zero shear stress keeps the maximal misfit
                best_cos = max(best_cos, float(np.dot(shear / magnitude, plane.rake_vector)))

        if self.strategy == FractureStrategy.DOT:
            return 0.5 - best_cos / 2
        return float(np.arccos(clamp_unit(best_cos)))
