from dataclasses import dataclass

from ..types import Matrix3x3, Vector3


@dataclass
class TensorParameters:
    """Stress tensor hypothesis and its principal frame.

    The principal directions are the rows of ``Hrot``, in the order
    (sigma1, sigma3, sigma2), so that ``Vh = Hrot @ V`` gives the coordinates
    in the principal frame of a vector ``V`` expressed in the geographic frame.
    Principal values follow the continuum mechanics convention (compression
    is negative) and are normalized: sigma1 = -1, sigma3 = 0, sigma2 = -R.

    Attributes:
        S: Stress tensor in the geographic frame
        S1_X: Direction of sigma1
        S3_Y: Direction of sigma3
        S2_Z: Direction of sigma2
        s1_X: Value of sigma1
        s3_Y: Value of sigma3
        s2_Z: Value of sigma2
        Hrot: Rotation tensor from the geographic to the principal frame
    """

    S: Matrix3x3
    S1_X: Vector3
    S3_Y: Vector3
    S2_Z: Vector3
    s1_X: float
    s3_Y: float
    s2_Z: float
    Hrot: Matrix3x3
