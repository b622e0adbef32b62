"""Fault plane and striation geometry from field measurements.

Angles follow the geological conventions: strike and trend are azimuths in
degrees measured clockwise from North, dip is measured downward from the
horizontal. Internally the plane normal is described by spherical angles in
the geographic frame S = (East, North, Up): ``phi`` is the azimuth measured
anticlockwise from East and ``theta`` the polar angle, equal to the dip.
"""

from enum import Enum
from typing import Optional

import numpy as np

from .logging_config import get_logger
from .tensor_math import EPS, deg2rad, normalize
from .types import KinematicInconsistencyError, ValidationError, Vector3

logger = get_logger(__name__)


class Direction(str, Enum):
    """Geographic direction of a dip or of a strike sense."""

    E = "E"
    W = "W"
    N = "N"
    S = "S"
    NE = "NE"
    SE = "SE"
    SW = "SW"
    NW = "NW"
    UND = "UND"

    @classmethod
    def from_string(cls, value: str) -> "Direction":
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValidationError(
                f"Unknown direction '{value}', expected one of {[d.value for d in cls]}"
            ) from None


class TypeOfMovement(str, Enum):
    """Declared sense of movement of the block located on the normal side."""

    N = "N"
    I = "I"  # noqa: E741
    RL = "RL"
    LL = "LL"
    N_RL = "N_RL"
    N_LL = "N_LL"
    I_RL = "I_RL"
    I_LL = "I_LL"
    UND = "UND"

    @classmethod
    def from_string(cls, value: str) -> "TypeOfMovement":
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValidationError(
                f"Unknown type of movement '{value}', expected one of {[m.value for m in cls]}"
            ) from None

    @property
    def components(self) -> tuple[int, int]:
        """Signs of the (strike-slip, dip-slip) components.

        Left-lateral and normal components are positive along ``e_phi`` and
        ``e_theta`` respectively.
        """
        return _MOVEMENT_COMPONENTS[self]


_MOVEMENT_COMPONENTS = {
    TypeOfMovement.N: (0, 1),
    TypeOfMovement.I: (0, -1),
    TypeOfMovement.RL: (-1, 0),
    TypeOfMovement.LL: (1, 0),
    TypeOfMovement.N_RL: (-1, 1),
    TypeOfMovement.N_LL: (1, 1),
    TypeOfMovement.I_RL: (-1, -1),
    TypeOfMovement.I_LL: (1, -1),
    TypeOfMovement.UND: (0, 0),
}

_NORTH_EAST = {Direction.N, Direction.E, Direction.NE}
_SOUTH_EAST = {Direction.S, Direction.E, Direction.SE}
_SOUTH_WEST = {Direction.S, Direction.W, Direction.SW}
_NORTH_WEST = {Direction.N, Direction.W, Direction.NW}


def _direction_groups(azimuth: float) -> tuple[set, set]:
    """Directions pointing toward ``azimuth`` and toward the opposite side."""
    a = azimuth % 360.0
    if np.isclose(a, 0.0) or np.isclose(a, 360.0):
        return {Direction.N}, {Direction.S}
    if a < 90.0 and not np.isclose(a, 90.0):
        return _NORTH_EAST, _SOUTH_WEST
    if np.isclose(a, 90.0):
        return {Direction.E}, {Direction.W}
    if a < 180.0 and not np.isclose(a, 180.0):
        return _SOUTH_EAST, _NORTH_WEST
    if np.isclose(a, 180.0):
        return {Direction.S}, {Direction.N}
    if a < 270.0 and not np.isclose(a, 270.0):
        return _SOUTH_WEST, _NORTH_EAST
    if np.isclose(a, 270.0):
        return {Direction.W}, {Direction.E}
    return _NORTH_WEST, _SOUTH_EAST


def sense_along(azimuth: float, direction: Direction) -> int:
    """Return +1 if ``direction`` points toward ``azimuth``, -1 if it points away.

    Raises:
        ValidationError: If ``direction`` is compatible with neither side
    """
    forward, backward = _direction_groups(azimuth)
    if direction in forward:
        return 1
    if direction in backward:
        return -1
    raise ValidationError(
        f"Direction {direction.value} is not compatible with azimuth {azimuth % 360.0:g}: "
        f"expected one of {sorted(d.value for d in forward | backward)}"
    )


def _sign(value: float) -> int:
    if value > EPS:
        return 1
    if value < -EPS:
        return -1
    return 0


class Fault:
    """A fault plane with an optional striation.

    Args:
        strike: Strike in degrees, in [0, 360)
        dip: Dip in degrees, in [0, 90]
        dip_direction: Dip direction, UND for horizontal and vertical planes

    Raises:
        ValidationError: If angles are out of range or the dip direction is
            missing, superfluous or incompatible with the strike
    """

    def __init__(
        self, strike: float, dip: float, dip_direction: Direction = Direction.UND
    ):
        if not 0.0 <= strike < 360.0:
            raise ValidationError(f"Strike {strike} is out of range [0, 360)")
        if not 0.0 <= dip <= 90.0:
            raise ValidationError(f"Dip {dip} is out of range [0, 90]")

        self.strike = strike
        self.dip = dip
        self.dip_direction = dip_direction
        self.striation: Optional[Vector3] = None
        self.e_perp_striation: Optional[Vector3] = None

        s = deg2rad(strike)
        if self.is_horizontal or self.is_vertical:
            if dip_direction != Direction.UND:
                raise ValidationError(
                    f"Dip direction must be UND for a plane with dip {dip:g}, got {dip_direction.value}"
                )
            self.phi = 0.0 if self.is_horizontal else (np.pi - s) % (2 * np.pi)
        else:
            if dip_direction == Direction.UND:
                raise ValidationError(
                    f"Dip direction must be defined for a plane with dip {dip:g}"
                )
            if sense_along(strike + 90.0, dip_direction) > 0:
                self.phi = (2 * np.pi - s) % (2 * np.pi)
            else:
                self.phi = (np.pi - s) % (2 * np.pi)
        self.theta = deg2rad(dip)

        sp, cp = np.sin(self.phi), np.cos(self.phi)
        st, ct = np.sin(self.theta), np.cos(self.theta)
        self.normal = np.array([st * cp, st * sp, ct])
        self.e_phi = np.array([-sp, cp, 0.0])
        self.e_theta = np.array([ct * cp, ct * sp, -st])

    @property
    def is_horizontal(self) -> bool:
        return self.dip == 0.0

    @property
    def is_vertical(self) -> bool:
        return self.dip == 90.0

    @property
    def strike_vector(self) -> Vector3:
        s = deg2rad(self.strike)
        return np.array([np.sin(s), np.cos(s), 0.0])

    def set_striation_from_rake(
        self,
        rake: float,
        strike_direction: Direction,
        type_of_movement: TypeOfMovement,
        uplifted_block: Direction = Direction.UND,
    ) -> Vector3:
        """Set the striation from its rake measured from a strike direction.

        Args:
            rake: Rake in degrees, in [0, 90]
            strike_direction: Strike sense the rake is measured from, may be
                UND for a pure dip-slip striation (rake 90)
            type_of_movement: Declared movement, used to orient the striation
            uplifted_block: Side of the uplifted block, only used for a
                vertical striation on a vertical plane

        Returns:
            Unit striation vector

        Raises:
            ValidationError: If parameters are missing or out of range
            KinematicInconsistencyError: If the movement contradicts the rake
        """
        if not 0.0 <= rake <= 90.0:
            raise ValidationError(f"Rake {rake} is out of range [0, 90]")
        if self.is_horizontal:
            raise ValidationError(
                "The striation of a horizontal plane must be defined by its trend"
            )

        if self.is_vertical and rake == 90.0:
            if uplifted_block == Direction.UND:
                raise ValidationError(
                    "A vertical striation on a vertical plane requires the direction of the uplifted block"
                )
            # The normal of a vertical plane points toward strike - 90
            up = sense_along(self.strike - 90.0, uplifted_block)
            return self._set_striation(np.array([0.0, 0.0, float(up)]))

        if type_of_movement == TypeOfMovement.UND:
            raise ValidationError(
                "The type of movement must be defined when the striation is given by its rake"
            )

        if rake == 90.0:
            alpha = 90.0
        else:
            if strike_direction == Direction.UND:
                raise ValidationError(
                    f"Strike direction must be defined for rake {rake:g}"
                )
            sense = sense_along(self.strike, strike_direction)
            along_e_phi = sense * np.dot(self.strike_vector, self.e_phi) > 0
            alpha = rake if along_e_phi else 180.0 - rake

        a = deg2rad(alpha)
        striation = np.cos(a) * self.e_phi + np.sin(a) * self.e_theta
        return self._set_striation(self._orient(striation, type_of_movement))

    def set_striation_from_trend(
        self, trend: float, type_of_movement: TypeOfMovement = TypeOfMovement.UND
    ) -> Vector3:
        """Set the striation from the trend of its horizontal projection.

        For a horizontal plane the trend gives the movement of the upper block
        and the type of movement is ignored.

        Raises:
            ValidationError: If the trend is out of range or lies in the
                vertical plane orthogonal to the fault strike of a vertical fault
            KinematicInconsistencyError: If the movement contradicts the striation
        """
        if not 0.0 <= trend < 360.0:
            raise ValidationError(f"Striation trend {trend} is out of range [0, 360)")
        t = deg2rad(trend)

        if self.is_horizontal:
            return self._set_striation(np.array([np.sin(t), np.cos(t), 0.0]))

        # Normal of the vertical plane containing the striation
        n_trend = np.array([np.cos(t), -np.sin(t), 0.0])
        striation = np.cross(self.normal, n_trend)
        if np.linalg.norm(striation) < EPS:
            raise ValidationError(
                f"Striation trend {trend:g} does not define a direction in the plane of strike {self.strike:g}"
            )
        striation = normalize(striation)
        if type_of_movement != TypeOfMovement.UND:
            striation = self._orient(striation, type_of_movement)
        return self._set_striation(striation)

    def _orient(self, striation: Vector3, type_of_movement: TypeOfMovement) -> Vector3:
        """Reverse ``striation`` when it points against the declared movement."""
        strike_slip, dip_slip = type_of_movement.components
        geometric = (
            _sign(np.dot(striation, self.e_phi)),
            _sign(np.dot(striation, self.e_theta)),
        )

        if self.is_vertical:
            if type_of_movement not in (TypeOfMovement.RL, TypeOfMovement.LL):
                raise KinematicInconsistencyError(
                    f"Type of movement of a vertical plane must be RL or LL, got {type_of_movement.value}"
                )
            declared = [(strike_slip, geometric[0])]
        else:
            declared = [
                (d, g) for d, g in zip((strike_slip, dip_slip), geometric) if d != 0
            ]

        if all(g != 0 and d == g for d, g in declared):
            return striation
        if all(g != 0 and d == -g for d, g in declared):
            return -striation
        raise KinematicInconsistencyError(
            f"Type of movement {type_of_movement.value} is not consistent with the striation "
            f"of the plane (strike {self.strike:g}, dip {self.dip:g})"
        )

    def _set_striation(self, striation: Vector3) -> Vector3:
        self.striation = striation
        self.e_perp_striation = np.cross(self.normal, striation)
        logger.debug(
            "Striation %s on plane (strike %g, dip %g)", striation, self.strike, self.dip
        )
        return striation
