"""Principal stress axes of a pair of conjugate planes."""

from typing import Sequence

import numpy as np

from .fault_helper import Fault, TypeOfMovement
from .logging_config import get_logger
from .tensor_math import EPS, normalize, rotation_tensor_from_basis
from .types import (
    GeometricConfigurationError,
    KinematicInconsistencyError,
    Matrix3x3,
    Vector3,
)

logger = get_logger(__name__)

_RIGHT_LATERAL = {TypeOfMovement.RL, TypeOfMovement.N_RL, TypeOfMovement.I_RL}
_LEFT_LATERAL = {TypeOfMovement.LL, TypeOfMovement.N_LL, TypeOfMovement.I_LL}
_NORMAL = {TypeOfMovement.N, TypeOfMovement.N_RL, TypeOfMovement.N_LL}
_INVERSE = {TypeOfMovement.I, TypeOfMovement.I_RL, TypeOfMovement.I_LL}


def bisector_axes(
    n1: Vector3, n2: Vector3, sigma2: Vector3, sigma1_bisects: bool
) -> tuple[Vector3, Vector3]:
    """Return (sigma1, sigma3) when one of them bisects the two normals.

    The triad (sigma1, sigma3, sigma2) is right-handed.
    """
    bisector = normalize(n1 + n2)
    if sigma1_bisects:
        return bisector, normalize(np.cross(sigma2, bisector))
    return normalize(np.cross(bisector, sigma2)), bisector


def movement_is_consistent(
    fault: Fault,
    sigma2: Vector3,
    sigma3: Vector3,
    type_of_movement: TypeOfMovement,
) -> bool:
    """Check a declared movement against the slip implied by the stress axes.

    The slip lies along the intersection of the plane with the (sigma1, sigma3)
    plane, on the side of sigma3 relative to the normal.
    """
    if type_of_movement == TypeOfMovement.UND:
        return True

    striation = normalize(np.cross(fault.normal, sigma2))
    if np.dot(fault.normal, sigma3) < 0:
        sigma3 = -sigma3
    if np.dot(striation, sigma3) < 0:
        striation = -striation

    strike_slip = np.dot(striation, fault.e_phi)
    dip_slip = np.dot(striation, fault.e_theta)

    if strike_slip > EPS:
        if type_of_movement in _RIGHT_LATERAL:
            return False
    elif strike_slip < -EPS:
        if type_of_movement in _LEFT_LATERAL:
            return False
    elif type_of_movement not in (TypeOfMovement.N, TypeOfMovement.I):
        return False

    if dip_slip > EPS:
        if type_of_movement in _INVERSE:
            return False
    elif dip_slip < -EPS:
        if type_of_movement in _NORMAL:
            return False
    elif type_of_movement not in (TypeOfMovement.RL, TypeOfMovement.LL):
        return False

    return True


def check_movement(
    fault: Fault,
    sigma2: Vector3,
    sigma3: Vector3,
    type_of_movement: TypeOfMovement,
) -> None:
    """Strict version of :func:`movement_is_consistent`.

    Raises:
        KinematicInconsistencyError: If the declared movement is inconsistent
    """
    if not movement_is_consistent(fault, sigma2, sigma3, type_of_movement):
        raise KinematicInconsistencyError(
            f"Type of movement {type_of_movement.value} of the plane (strike {fault.strike:g}, "
            f"dip {fault.dip:g}) is not consistent with the stress axes of the conjugate planes"
        )


def conjugate_rotation_tensor(
    faults: Sequence[Fault],
    movements: Sequence[TypeOfMovement],
    sigma1_bisects_obtuse: bool,
) -> Matrix3x3:
    """Rotation tensor (rows sigma1, sigma3, sigma2) of two conjugate planes.

    Args:
        faults: The two planes
        movements: Declared movement of each plane, UND when unknown
        sigma1_bisects_obtuse: True when sigma1 bisects the obtuse angle
            between the normals (conjugate faults), False when it bisects the
            acute angle (compaction shear bands)

    Raises:
        GeometricConfigurationError: If the planes are identical, or
            perpendicular with no declared movement
        KinematicInconsistencyError: If the declared movements contradict
            every admissible choice of axes
    """
    n1, n2 = faults[0].normal, faults[1].normal
    cos_angle = float(np.dot(n1, n2))
    if abs(cos_angle) > 1.0 - EPS:
        raise GeometricConfigurationError(
            "The two conjugate planes are identical: their normals are parallel"
        )

    sigma2 = normalize(np.cross(n1, n2))
    angle = np.arccos(np.clip(cos_angle, -1.0, 1.0))

    if abs(angle - np.pi / 2) < EPS:
        if all(m == TypeOfMovement.UND for m in movements):
            raise GeometricConfigurationError(
                "The conjugate planes are perpendicular: define the type of movement "
                "of at least one plane to locate sigma 1 and sigma 3"
            )
        # Acute configuration first, then the obtuse one
        for sigma1_bisects in (not sigma1_bisects_obtuse, sigma1_bisects_obtuse):
            sigma1, sigma3 = bisector_axes(n1, n2, sigma2, sigma1_bisects)
            if all(
                movement_is_consistent(fault, sigma2, sigma3, movement)
                for fault, movement in zip(faults, movements)
            ):
                return rotation_tensor_from_basis(sigma1, sigma3, sigma2)
            logger.debug(
                "Perpendicular planes: axes with sigma1 bisecting=%s rejected by the declared movements",
                sigma1_bisects,
            )
        raise KinematicInconsistencyError(
            "The types of movement of the perpendicular conjugate planes are not consistent "
            "with either choice of sigma 1 and sigma 3"
        )

    # Angle between the normals below 90 degrees: the bisector lies in the acute angle
    acute = angle < np.pi / 2
    sigma1_bisects = acute != sigma1_bisects_obtuse
    sigma1, sigma3 = bisector_axes(n1, n2, sigma2, sigma1_bisects)
    for fault, movement in zip(faults, movements):
        check_movement(fault, sigma2, sigma3, movement)
    return rotation_tensor_from_basis(sigma1, sigma3, sigma2)
