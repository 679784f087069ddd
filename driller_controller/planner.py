"""
Rotation planning for a mirrored rotor pair.

Every step moves the pair by one caliber. When the right rotor is off the
caliber grid, the first step is split unevenly between the two rotors so
that the following steps land back on the grid.
"""

from enum import Enum
from typing import NamedTuple, Tuple

from .angles import aberrance_degrees, to_radians, wrap_to_one_turn

ROTATION_CALIBER_DEGREES = 5
ROTATION_VELOCITY = 0.20  # rad/s


class Direction(Enum):
    BACKWARD = -1
    IDLE = 0
    FORWARD = 1


class RotationStep(NamedTuple):
    """Limit window and target velocity for one rotor over one step."""
    increment: float
    lower_limit: float
    upper_limit: float
    velocity: float


def rotation_increments(
    direction: Direction,
    reference_angle: float,
    caliber_degrees: int = ROTATION_CALIBER_DEGREES,
) -> Tuple[float, float]:
    """Return the (right, left) increments in radians for the next step.

    The aberrance is always measured on the right rotor; the left rotor is
    assumed to sit at the mirrored phase.
    """
    if direction is Direction.IDLE:
        raise ValueError("Cannot plan a rotation step while idle.")
    right_deg = left_deg = caliber_degrees
    aberrance = aberrance_degrees(reference_angle, caliber_degrees)
    if aberrance != 0:
        if direction is Direction.FORWARD:
            right_deg, left_deg = caliber_degrees - aberrance, aberrance
        else:
            right_deg, left_deg = aberrance, caliber_degrees - aberrance
    return to_radians(right_deg), to_radians(left_deg)


def limit_window(current_angle: float, target_angle: float) -> Tuple[float, float]:
    if current_angle < target_angle:
        return current_angle, target_angle
    return target_angle, current_angle


def plan_rotation(
    direction: Direction,
    right_angle: float,
    left_angle: float,
    caliber_degrees: int = ROTATION_CALIBER_DEGREES,
    velocity: float = ROTATION_VELOCITY,
) -> Tuple[RotationStep, RotationStep]:
    """Plan the next step for both rotors.

    Both targets are measured from the right rotor's angle: the right rotor
    advances along ``direction`` and the left rotor by the mirrored amount.
    Each window then spans from the rotor's own current angle to its target.
    """
    right_increment, left_increment = rotation_increments(direction, right_angle, caliber_degrees)
    sign = direction.value

    right_target = wrap_to_one_turn(abs(right_angle + sign * right_increment))
    right_lower, right_upper = limit_window(right_angle, right_target)

    left_target = wrap_to_one_turn(abs(right_angle - sign * left_increment))
    left_lower, left_upper = limit_window(left_angle, left_target)

    return (
        RotationStep(right_increment, right_lower, right_upper, sign * velocity),
        RotationStep(left_increment, left_lower, left_upper, -sign * velocity),
    )
