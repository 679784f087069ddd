"""
Angle helpers shared by the planner and the rotor adapters.

Rotor angles are reported in radians; the caliber grid is expressed in whole
degrees.
"""

import math

PI_DEGREES = 180
RADIANS_IN_CIRCLE = 2 * math.pi


def to_radians(degrees: float) -> float:
    return degrees * math.pi / PI_DEGREES


def to_degrees(radians: float) -> int:
    """Convert radians to the nearest whole degree (ties round to even)."""
    return int(round(radians * PI_DEGREES / math.pi))


def wrap_to_one_turn(radians: float) -> float:
    """Fold an angle that has run past a full turn back into [0, 2*pi].

    Values at or below one full turn are returned unchanged, so an angle of
    exactly 2*pi stays 2*pi.
    """
    if radians > RADIANS_IN_CIRCLE:
        radians = math.fmod(radians, RADIANS_IN_CIRCLE)
    return radians


def aberrance_degrees(radians: float, caliber_degrees: int) -> int:
    """Offset, in whole degrees, of an angle from the caliber grid."""
    return to_degrees(radians) % caliber_degrees
