"""Vector and rotation tensor utilities in the geographic frame S = (East, North, Up)."""

from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation

from .types import Matrix3x3, Vector3

EPS = 1e-7


@dataclass
class SphericalCoords:
    """Spherical angles of a unit vector.

    Attributes:
        phi: Azimuth in [0, 2 pi), anticlockwise from East
        theta: Polar angle in [0, pi], measured from the upward vertical
    """

    phi: float = 0.0
    theta: float = 0.0


def deg2rad(angle: float) -> float:
    return float(np.deg2rad(angle))


def rad2deg(angle: float) -> float:
    return float(np.rad2deg(angle))


def normalize(v: Vector3) -> Vector3:
    """Return ``v`` scaled to unit length.

    Raises:
        ValueError: If ``v`` is the null vector
    """
    v = np.asarray(v, dtype=float)
    norm = np.linalg.norm(v)
    if norm < EPS:
        raise ValueError(f"Cannot normalize a null vector: {v}")
    return v / norm


def clamp_unit(value: float) -> float:
    """Constrain a cosine to [-1, 1] before an inverse trigonometric call."""
    return float(np.clip(value, -1.0, 1.0))


def spherical_to_unit_vector(coords: SphericalCoords) -> Vector3:
    return np.array(
        [
            np.sin(coords.theta) * np.cos(coords.phi),
            np.sin(coords.theta) * np.sin(coords.phi),
            np.cos(coords.theta),
        ]
    )


def unit_vector_to_spherical(v: Vector3) -> SphericalCoords:
    """Invert :func:`spherical_to_unit_vector`.

    For a vertical vector the azimuth is undefined and set to 0.
    """
    theta = np.arccos(clamp_unit(v[2]))
    stheta = np.sin(theta)
    if abs(stheta) <= EPS:
        return SphericalCoords(phi=0.0, theta=float(theta))
    phi = np.arccos(clamp_unit(v[0] / stheta))
    if v[1] < 0:
        phi = 2 * np.pi - phi
    return SphericalCoords(phi=float(phi), theta=float(theta))


def trend_plunge_to_unit_vector(trend: float, plunge: float) -> Vector3:
    """Unit vector of a line given its trend (clockwise from North) and plunge (downward), in degrees."""
    t = deg2rad(trend)
    p = deg2rad(plunge)
    return np.array([np.sin(t) * np.cos(p), np.cos(t) * np.cos(p), -np.sin(p)])


def unit_vector_to_trend_plunge(v: Vector3) -> tuple[float, float]:
    """Trend and plunge in degrees of the line carrying ``v``, pointing downward."""
    v = normalize(v)
    if v[2] > 0:
        v = -v
    plunge = rad2deg(np.arcsin(clamp_unit(-v[2])))
    trend = rad2deg(np.arctan2(v[0], v[1])) % 360.0
    return trend, plunge


def rotation_tensor_from_axis_angle(axis: Vector3, angle: float) -> Matrix3x3:
    """Proper rotation tensor of ``angle`` radians around ``axis`` (Rodrigues form)."""
    return Rotation.from_rotvec(normalize(axis) * angle).as_matrix()


def rotation_tensor_from_basis(x: Vector3, y: Vector3, z: Vector3) -> Matrix3x3:
    """Rotation tensor whose rows are the basis vectors of the target frame.

    A vector V in S has coordinates ``R @ V`` in the frame (x, y, z).
    """
    return np.vstack([x, y, z]).astype(float)


def min_rot_angle(tensor: Matrix3x3) -> float:
    """Minimum rotation angle between two principal stress frames.

    ``tensor`` is the product of the two rotation tensors. Four right-handed
    relabelings of the principal axes are equivalent, (s1, s3, s2),
    (s1, -s3, -s2), (-s1, s3, -s2) and (-s1, -s3, s2); the relabeling with the
    largest trace gives the smallest rotation since trace = 1 + 2 cos(angle).

    Args:
        tensor: 3x3 rotation tensor product

    Returns:
        Rotation angle in [0, pi]
    """
    d0, d1, d2 = tensor[0, 0], tensor[1, 1], tensor[2, 2]
    traces = (d0 + d1 + d2, d0 - d1 - d2, -d0 + d1 - d2, -d0 - d1 + d2)
    cos_angle = (max(traces) - 1.0) / 2.0
    return float(np.arccos(clamp_unit(cos_angle)))
