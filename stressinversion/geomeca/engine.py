from typing import Optional

import numpy as np

from ..types import Matrix3x3, Vector3
from .tensor_parameters import TensorParameters


def tensor_parameters_from_rotation(
    hrot: Matrix3x3, stress_ratio: float
) -> TensorParameters:
    """Build the normalized stress tensor of a hypothesis.

    S = Hrot^T diag(-1, 0, -R) Hrot, the diagonal being ordered as the rows of
    ``hrot`` (sigma1, sigma3, sigma2).

    Args:
        hrot: Rotation tensor whose rows are the principal directions
        stress_ratio: R = (sigma2 - sigma3) / (sigma1 - sigma3)

    Returns:
        Stress tensor and principal frame of the hypothesis
    """
    hrot = np.asarray(hrot, dtype=float)
    values = np.array([-1.0, 0.0, -stress_ratio])
    S = hrot.T @ np.diag(values) @ hrot
    return TensorParameters(
        S=S,
        S1_X=hrot[0].copy(),
        S3_Y=hrot[1].copy(),
        S2_Z=hrot[2].copy(),
        s1_X=values[0],
        s3_Y=values[1],
        s2_Z=values[2],
        Hrot=hrot,
    )


class HomogeneousEngine:
    """Engine producing the same stress tensor at every point."""

    def __init__(self):
        self._hrot: Matrix3x3 = np.eye(3)
        self._stress_ratio = 0.0
        self._parameters: Optional[TensorParameters] = None

    def set_hypothetical_stress(self, hrot: Matrix3x3, stress_ratio: float) -> None:
        self._hrot = np.asarray(hrot, dtype=float)
        self._stress_ratio = stress_ratio
        self._parameters = tensor_parameters_from_rotation(self._hrot, stress_ratio)

    def Hrot(self) -> Matrix3x3:
        return self._hrot

    def stress_ratio(self) -> float:
        return self._stress_ratio

    def S(self) -> Matrix3x3:
        return self.stress(np.zeros(3)).S

    def stress(self, position: Vector3) -> TensorParameters:
        if self._parameters is None:
            self._parameters = tensor_parameters_from_rotation(
                self._hrot, self._stress_ratio
            )
        return self._parameters
