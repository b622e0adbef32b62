"""Test suite for fault plane and striation geometry."""

import numpy as np
import pytest

from stressinversion.fault_helper import (
    Direction,
    Fault,
    TypeOfMovement,
    sense_along,
)
from stressinversion.types import KinematicInconsistencyError, ValidationError

SQRT2_2 = np.sqrt(2) / 2


@pytest.mark.parametrize(
    "strike,dip,dip_direction",
    [
        (0.0, 0.0, Direction.UND),
        (0.0, 45.0, Direction.E),
        (0.0, 45.0, Direction.W),
        (30.0, 70.0, Direction.SE),
        (30.0, 70.0, Direction.NW),
        (90.0, 10.0, Direction.S),
        (135.0, 60.0, Direction.SW),
        (200.0, 35.0, Direction.NW),
        (300.0, 80.0, Direction.NE),
        (270.0, 90.0, Direction.UND),
    ],
)
def test_normal_is_upward_unit_vector(strike, dip, dip_direction):
    """Test that plane normals are unit vectors pointing upward."""
    fault = Fault(strike, dip, dip_direction)
    assert np.linalg.norm(fault.normal) == pytest.approx(1.0, abs=1e-9)
    assert fault.normal[2] >= 0.0
    assert abs(np.dot(fault.normal, fault.e_phi)) < 1e-9
    assert abs(np.dot(fault.normal, fault.e_theta)) < 1e-9


def test_normal_tilts_toward_dip_direction():
    """Test the normal of a plane dipping East."""
    fault = Fault(0.0, 45.0, Direction.E)
    assert np.allclose(fault.normal, [SQRT2_2, 0.0, SQRT2_2])
    fault = Fault(0.0, 45.0, Direction.W)
    assert np.allclose(fault.normal, [-SQRT2_2, 0.0, SQRT2_2])


def test_dip_direction_required_for_dipping_plane():
    """Test that a dipping plane needs a dip direction."""
    with pytest.raises(ValidationError):
        Fault(0.0, 45.0, Direction.UND)


@pytest.mark.parametrize("dip", [0.0, 90.0])
def test_dip_direction_forbidden_for_horizontal_and_vertical(dip):
    """Test that horizontal and vertical planes take an undefined dip direction."""
    with pytest.raises(ValidationError):
        Fault(0.0, dip, Direction.N)


def test_dip_direction_incompatible_with_strike():
    """Test that the dip direction must be orthogonal to the strike."""
    with pytest.raises(ValidationError):
        Fault(0.0, 45.0, Direction.N)


def test_out_of_range_angles():
    """Test that strike and dip ranges are checked."""
    with pytest.raises(ValidationError):
        Fault(360.0, 45.0, Direction.E)
    with pytest.raises(ValidationError):
        Fault(0.0, 95.0, Direction.E)


def test_sense_along():
    """Test directions pointing toward or away from an azimuth."""
    assert sense_along(45.0, Direction.N) == 1
    assert sense_along(45.0, Direction.SW) == -1
    assert sense_along(-90.0, Direction.W) == 1
    with pytest.raises(ValidationError):
        sense_along(45.0, Direction.NW)


def test_pure_dip_slip_normal_and_inverse():
    """Test a rake of 90 with normal and inverse movements."""
    fault = Fault(0.0, 45.0, Direction.E)
    striation = fault.set_striation_from_rake(90.0, Direction.UND, TypeOfMovement.N)
    assert np.allclose(striation, [SQRT2_2, 0.0, -SQRT2_2])

    striation = fault.set_striation_from_rake(90.0, Direction.UND, TypeOfMovement.I)
    assert np.allclose(striation, [-SQRT2_2, 0.0, SQRT2_2])


def test_pure_strike_slip():
    """Test a rake of 0 with left and right lateral movements."""
    fault = Fault(0.0, 45.0, Direction.E)
    assert np.allclose(
        fault.set_striation_from_rake(0.0, Direction.N, TypeOfMovement.LL), [0.0, 1.0, 0.0]
    )
    assert np.allclose(
        fault.set_striation_from_rake(0.0, Direction.N, TypeOfMovement.RL), [0.0, -1.0, 0.0]
    )


def test_strike_slip_declared_as_dip_slip():
    """Test that a dip-slip movement on a horizontal striation is inconsistent."""
    fault = Fault(0.0, 45.0, Direction.E)
    with pytest.raises(KinematicInconsistencyError):
        fault.set_striation_from_rake(0.0, Direction.N, TypeOfMovement.N)


def test_oblique_striation_orientation():
    """Test that an oblique striation is reversed only when all components disagree."""
    fault = Fault(0.0, 45.0, Direction.E)
    striation = fault.set_striation_from_rake(30.0, Direction.S, TypeOfMovement.N_RL)
    assert striation[1] < 0.0
    assert striation[2] < 0.0

    reversed_striation = fault.set_striation_from_rake(30.0, Direction.S, TypeOfMovement.I_LL)
    assert np.allclose(reversed_striation, -striation)

    with pytest.raises(KinematicInconsistencyError):
        fault.set_striation_from_rake(30.0, Direction.S, TypeOfMovement.N_LL)


def test_striation_lies_in_plane():
    """Test that striations are orthogonal to the normal."""
    for strike, dip, dip_direction, rake, strike_direction, movement in [
        (10.0, 30.0, Direction.SE, 20.0, Direction.N, TypeOfMovement.N_LL),
        (120.0, 80.0, Direction.NE, 70.0, Direction.SE, TypeOfMovement.I_RL),
        (250.0, 55.0, Direction.NW, 45.0, Direction.W, TypeOfMovement.N_RL),
    ]:
        fault = Fault(strike, dip, dip_direction)
        try:
            striation = fault.set_striation_from_rake(rake, strike_direction, movement)
        except KinematicInconsistencyError:
            striation = fault.set_striation_from_rake(
                rake, strike_direction, _reverse(movement)
            )
        assert abs(np.dot(fault.normal, striation)) < 1e-7
        assert np.linalg.norm(striation) == pytest.approx(1.0)
        assert np.allclose(fault.e_perp_striation, np.cross(fault.normal, striation))


def _reverse(movement):
    return {
        TypeOfMovement.N_LL: TypeOfMovement.N_RL,
        TypeOfMovement.N_RL: TypeOfMovement.N_LL,
        TypeOfMovement.I_RL: TypeOfMovement.I_LL,
        TypeOfMovement.I_LL: TypeOfMovement.I_RL,
    }[movement]


def test_rake_requires_movement():
    """Test that a striation given by its rake needs a type of movement."""
    fault = Fault(0.0, 45.0, Direction.E)
    with pytest.raises(ValidationError):
        fault.set_striation_from_rake(30.0, Direction.N, TypeOfMovement.UND)


def test_horizontal_plane_requires_trend():
    """Test that the striation of a horizontal plane is given by its trend."""
    fault = Fault(0.0, 0.0)
    with pytest.raises(ValidationError):
        fault.set_striation_from_rake(30.0, Direction.N, TypeOfMovement.N)
    assert np.allclose(fault.set_striation_from_trend(90.0), [1.0, 0.0, 0.0])


def test_vertical_striation_on_vertical_plane():
    """Test that the uplifted block orients a vertical striation."""
    fault = Fault(0.0, 90.0)
    assert np.allclose(fault.normal, [-1.0, 0.0, 0.0])
    up = fault.set_striation_from_rake(
        90.0, Direction.UND, TypeOfMovement.UND, uplifted_block=Direction.W
    )
    assert np.allclose(up, [0.0, 0.0, 1.0])
    down = fault.set_striation_from_rake(
        90.0, Direction.UND, TypeOfMovement.UND, uplifted_block=Direction.E
    )
    assert np.allclose(down, [0.0, 0.0, -1.0])
    with pytest.raises(ValidationError):
        fault.set_striation_from_rake(90.0, Direction.UND, TypeOfMovement.UND)


def test_vertical_plane_requires_lateral_movement():
    """Test that vertical planes only accept strike-slip movements."""
    fault = Fault(0.0, 90.0)
    with pytest.raises(KinematicInconsistencyError):
        fault.set_striation_from_rake(30.0, Direction.N, TypeOfMovement.N)
    striation = fault.set_striation_from_rake(0.0, Direction.N, TypeOfMovement.RL)
    assert np.allclose(striation, [0.0, 1.0, 0.0])


def test_striation_from_trend():
    """Test a down-dip striation given by its trend."""
    fault = Fault(0.0, 45.0, Direction.E)
    striation = fault.set_striation_from_trend(90.0, TypeOfMovement.N)
    assert np.allclose(striation, [SQRT2_2, 0.0, -SQRT2_2])
    striation = fault.set_striation_from_trend(270.0, TypeOfMovement.I)
    assert np.allclose(striation, [-SQRT2_2, 0.0, SQRT2_2])


def test_trend_along_strike_of_vertical_plane():
    """Test that the trend of a striation on a vertical plane is degenerate."""
    fault = Fault(0.0, 90.0)
    with pytest.raises(ValidationError):
        fault.set_striation_from_trend(0.0)


def test_parse_enums():
    """Test reading directions and movements from strings."""
    assert Direction.from_string(" ne ") == Direction.NE
    assert TypeOfMovement.from_string("N_RL") == TypeOfMovement.N_RL
    with pytest.raises(ValidationError):
        Direction.from_string("NNE")
    with pytest.raises(ValidationError):
        TypeOfMovement.from_string("XX")
