"""
Rotor handles and the mirrored rotor pair.

A rotor handle is any object exposing:

- ``angle`` (read, radians)
- ``lower_limit`` / ``upper_limit`` (read/write, radians)
- ``target_velocity`` (write, radians/second)
- ``locked`` (write, bool)

``SimulatedRotor`` implements this in memory; ``SerialRotor`` in
``serial_rotor.py`` forwards it to a drive over a serial line.
"""

import math
from enum import Enum
from typing import Dict, Optional, Tuple

from loguru import logger

from .angles import RADIANS_IN_CIRCLE
from .errors import ConfigurationError, HardwareWriteFailure


class Side(Enum):
    RIGHT = "right"
    LEFT = "left"


class SimulatedRotor:
    """In-memory rotor that turns at its target velocity until it hits a limit."""

    def __init__(
        self,
        name: str,
        angle: float = 0.0,
        lower_limit: float = 0.0,
        upper_limit: float = RADIANS_IN_CIRCLE,
        locked: bool = True,
    ):
        self.name = name
        self.logger = logger.bind(rotor_name=name)
        self._angle = angle % RADIANS_IN_CIRCLE
        self._lower_limit = lower_limit
        self._upper_limit = upper_limit
        self._target_velocity = 0.0
        self.locked = locked

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def lower_limit(self) -> float:
        return self._lower_limit

    @lower_limit.setter
    def lower_limit(self, value: float):
        self._lower_limit = self._checked(value, "lower limit")

    @property
    def upper_limit(self) -> float:
        return self._upper_limit

    @upper_limit.setter
    def upper_limit(self, value: float):
        self._upper_limit = self._checked(value, "upper limit")

    @property
    def target_velocity(self) -> float:
        return self._target_velocity

    @target_velocity.setter
    def target_velocity(self, value: float):
        self._target_velocity = self._checked(value, "target velocity")

    def _checked(self, value: float, what: str) -> float:
        if not math.isfinite(value):
            raise HardwareWriteFailure(f"{self.name}: rejected {what} {value!r}.")
        return float(value)

    def advance(self, seconds: float) -> float:
        """Turn for ``seconds`` at the target velocity, stopping at the limits."""
        if self.locked or self._target_velocity == 0.0:
            return self._angle
        moved = self._angle + self._target_velocity * seconds
        self._angle = min(max(moved, self._lower_limit), self._upper_limit)
        self.logger.trace(f"Advanced {seconds:.3f}s to {self._angle:.5f} rad")
        return self._angle


class RotorRegistry:
    """Name lookup for rotor handles."""

    def __init__(self, rotors: Optional[Dict[str, object]] = None):
        self._rotors: Dict[str, object] = dict(rotors or {})

    def add(self, name: str, rotor) -> None:
        self._rotors[name] = rotor

    def resolve_actuator(self, name: str):
        try:
            return self._rotors[name]
        except KeyError:
            raise ConfigurationError(f"Rotor '{name}' not found. Known rotors: {sorted(self._rotors)}") from None


class ActuatorPair:
    """The right and left rotor of a mirrored pair.

    Writes are forwarded unchecked; whatever the handle raises propagates.
    """

    def __init__(self, right, left):
        self.right = right
        self.left = left

    def _rotor(self, side: Side):
        return self.right if side is Side.RIGHT else self.left

    def lock(self, locked: bool) -> None:
        self.right.locked = locked
        self.left.locked = locked

    def set_velocity(self, side: Side, radians_per_second: float) -> None:
        self._rotor(side).target_velocity = radians_per_second

    def set_limits(self, side: Side, lower: float, upper: float) -> None:
        rotor = self._rotor(side)
        rotor.lower_limit = lower
        rotor.upper_limit = upper

    def read_angle(self, side: Side) -> float:
        return self._rotor(side).angle

    def read_limits(self, side: Side) -> Tuple[float, float]:
        rotor = self._rotor(side)
        return rotor.lower_limit, rotor.upper_limit
