from typing import Optional, Sequence

import numpy as np

from ..fault_helper import Fault
from ..geomeca.tensor_parameters import TensorParameters
from ..logging_config import get_logger
from ..tensor_math import (
    EPS,
    clamp_unit,
    deg2rad,
    min_rot_angle,
    normalize,
    rotation_tensor_from_axis_angle,
    rotation_tensor_from_basis,
)
from ..types import InternalInvariantError, Vector3
from .data import Data, DataStatus
from .description import DataArguments
from .readers import read_striated_plane

logger = get_logger(__name__)

DEFAULT_ANGLE_S1N = 3 * np.pi / 8
DEFAULT_HALF_WIDTH = np.pi / 8


class NeoformedStriatedPlane(Data):
    """A fault plane formed and slipped under the stress to recover.

    Sigma2 lies in the plane, orthogonal to the striation, and sigma1 lies in
    the plane (normal, striation) at an angle from the normal taken within an
    interval. The interval is either given directly (columns 15 and 16) or
    derived from friction angles (columns 13 and 14) through the Mohr-Coulomb
    relation <sigma1, n> = pi/4 + phi/2. It defaults to [pi/4, pi/2].

    Attributes:
        fault: Plane and striation
        sigma2: Direction of sigma2
        angle_mean: Center of the <sigma1, n> interval, in radians
        half_width: Half width of the <sigma1, n> interval, in radians
        sigma1_mean: Direction of sigma1 at the center of the interval
        Mrot: Rotation tensors of the frames at the interval bounds and center
    """

    default_angle_mean = DEFAULT_ANGLE_S1N
    default_half_width = DEFAULT_HALF_WIDTH
    max_angle_s1n = 90.0
    uses_friction = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.fault: Optional[Fault] = None
        self.sigma2: Optional[Vector3] = None
        self.angle_mean = self.default_angle_mean
        self.half_width = self.default_half_width
        self.sigma1_mean: Optional[Vector3] = None
        self.Mrot: list[np.ndarray] = []

    def initialize(self, arguments: Sequence[DataArguments]) -> DataStatus:
        args = arguments[0]
        status = args.status
        self._read_weight(args)

        fault = read_striated_plane(args)
        self._read_interval(args)
        if not status.status:
            return status

        self.fault = fault
        n = fault.normal
        s = fault.striation
        self.sigma2 = normalize(np.cross(n, s))

        angles = (
            self.angle_mean - self.half_width,
            self.angle_mean,
            self.angle_mean + self.half_width,
        )
        self.Mrot = []
        for angle in angles:
            sigma1 = np.cos(angle) * n - np.sin(angle) * s
            sigma3 = np.cross(self.sigma2, sigma1)
            self.Mrot.append(rotation_tensor_from_basis(sigma1, sigma3, self.sigma2))
        self.sigma1_mean = self.Mrot[1][0]

        logger.debug(
            "%s %s: <sigma1, n> in [%g, %g] rad",
            type(self).__name__,
            self.data_number,
            angles[0],
            angles[2],
        )
        return status

    def _read_interval(self, args: DataArguments) -> None:
        has_friction = args.is_defined(13) or args.is_defined(14)
        has_angles = args.is_defined(15) or args.is_defined(16)

        if has_friction and has_angles:
            args.error(
                15,
                "define either friction angles (columns 13 and 14) or <sigma1, n> "
                "angles (columns 15 and 16), but not both",
            )
            return
        if has_friction and not self.uses_friction:
            args.error(13, f"friction angles are not used by {type(self).__name__}")
            return

        if has_angles:
            low = args.get_float(15, low=0.0, high=self.max_angle_s1n)
            high = args.get_float(16, low=0.0, high=self.max_angle_s1n)
            if low is None or high is None:
                return
            if high < low:
                args.error(16, f"maximum angle {high:g} is lower than minimum angle {low:g}")
                return
            low, high = deg2rad(low), deg2rad(high)
            self.angle_mean = (low + high) / 2
            self.half_width = (high - low) / 2
        elif has_friction:
            low = args.get_float(13)
            high = args.get_float(14)
            if low is None or high is None:
                return
            if high < low:
                args.error(14, f"maximum friction angle {high:g} is lower than minimum {low:g}")
                return
            low, high = deg2rad(low), deg2rad(high)
            self.angle_mean = (np.pi + low + high) / 4
            self.half_width = (high - low) / 4

    def stress_cost(self, stress: TensorParameters) -> float:
        sigma1_h = stress.Hrot[0]
        sigma2_h = stress.Hrot[2]

        # Rotation aligning sigma2 of the hypothesis with sigma2 of the plane
        axis = np.cross(sigma2_h, self.sigma2)
        if np.linalg.norm(axis) > EPS:
            omega = float(np.arccos(clamp_unit(np.dot(sigma2_h, self.sigma2))))
            if omega <= np.pi / 2:
                rotation = rotation_tensor_from_axis_angle(axis, omega)
            else:
                omega = np.pi - omega
                rotation = rotation_tensor_from_axis_angle(-axis, omega)
            sigma1_rot = rotation @ sigma1_h
        else:
            omega = 0.0
            sigma1_rot = sigma1_h

        deviation = np.arccos(clamp_unit(abs(np.dot(self.sigma1_mean, sigma1_rot))))
        if deviation <= self.half_width:
            return omega

        costs = [min_rot_angle(M @ stress.Hrot.T) for M in self.Mrot]
        if costs[1] < costs[0] and costs[1] < costs[2]:
            raise InternalInvariantError(
                f"{type(self).__name__} {self.data_number}: minimum misfit found at the "
                f"center of the <sigma1, n> interval outside of the interval"
            )
        return min(costs)


class StriatedDilatantShearBand(NeoformedStriatedPlane):
    """Striated dilatant shear band, same geometry as a neoformed striated plane."""

    pass


class StriatedCompactionalShearBand(NeoformedStriatedPlane):
    """Striated compactional shear band of a porous granular rock.

    Formed by grain crushing, the band makes a small angle with sigma1: the
    <sigma1, n> interval lies in [0, pi/4] and defaults to the whole of it.
    Friction angles do not apply.
    """

    default_angle_mean = np.pi / 8
    default_half_width = np.pi / 8
    max_angle_s1n = 45.0
    uses_friction = False
