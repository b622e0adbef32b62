"""Readers of the plane and striation columns shared by several data types."""

from typing import Optional

from ..fault_helper import Direction, Fault
from ..types import ValidationError
from .description import DataArguments


def read_plane(arguments: DataArguments) -> Optional[Fault]:
    """Read strike, dip and dip direction (columns 2 to 4).

    Returns:
        The plane, or None when an error was recorded in the arguments
    """
    strike = arguments.get_float(2)
    dip = arguments.get_float(3)
    dip_direction = arguments.get_direction(4)
    if strike is None or dip is None or dip_direction is None:
        return None
    try:
        return Fault(strike, dip, dip_direction)
    except ValidationError as e:
        arguments.error(4, str(e))
        return None


def read_striated_plane(arguments: DataArguments) -> Optional[Fault]:
    """Read a plane and its striation (columns 2 to 8).

    The striation is given either by its rake and strike direction (columns 5
    and 6) or by its trend (column 7). For a vertical plane with a vertical
    striation, the dip direction column holds the side of the uplifted block.

    Returns:
        The plane with its striation, or None when an error was recorded
    """
    has_rake = arguments.is_defined(5)
    has_strike_direction = arguments.is_defined(6)
    has_trend = arguments.is_defined(7)

    if has_trend and (has_rake or has_strike_direction):
        arguments.error(
            7,
            "define either the rake and strike direction (columns 5 and 6) "
            "or the striation trend (column 7), but not both",
        )
        return None
    if not has_trend and not has_rake:
        arguments.error(
            5,
            "set the rake and strike direction (columns 5 and 6) "
            "or the striation trend (column 7)",
        )
        return None

    strike = arguments.get_float(2)
    dip = arguments.get_float(3)
    dip_direction = arguments.get_direction(4)
    movement = arguments.get_movement(8)
    rake = arguments.get_float(5) if has_rake else None
    strike_direction = arguments.get_direction(6)
    trend = arguments.get_float(7) if has_trend else None
    if not arguments.status.status:
        return None

    uplifted_block = Direction.UND
    if dip == 90.0 and rake == 90.0:
        uplifted_block, dip_direction = dip_direction, Direction.UND

    try:
        fault = Fault(strike, dip, dip_direction)
    except ValidationError as e:
        arguments.error(4, str(e))
        return None

    try:
        if has_trend:
            fault.set_striation_from_trend(trend, movement)
        else:
            fault.set_striation_from_rake(
                rake, strike_direction, movement, uplifted_block
            )
    except ValidationError as e:
        arguments.error(7 if has_trend else 5, str(e))
        return None
    return fault
