"""
Driller Controller Package

A Python package for stepping a mirrored pair of drill rotors by caliber
increments. Provides the controller state machine, the rotation planner,
simulated and serial rotor handles, and a tick host.
"""

from .angles import (
    RADIANS_IN_CIRCLE,
    aberrance_degrees,
    to_degrees,
    to_radians,
    wrap_to_one_turn,
)
from .controller import (
    COMMAND_ROTATE_BACKWARD,
    COMMAND_ROTATE_FORWARD,
    LEFT_ROTOR_NAME,
    RIGHT_ROTOR_NAME,
    DrillerController,
    TickRate,
    UpdateSource,
    is_invoked_by_user,
)
from .errors import (
    ConfigurationError,
    DrillerError,
    HardwareReadFailure,
    HardwareWriteFailure,
)
from .host import TickRunner
from .planner import (
    ROTATION_CALIBER_DEGREES,
    ROTATION_VELOCITY,
    Direction,
    RotationStep,
    limit_window,
    plan_rotation,
    rotation_increments,
)
from .rotors import ActuatorPair, RotorRegistry, Side, SimulatedRotor
from .serial_rotor import SerialRotor, hex_to_radians, radians_to_hex

__all__ = [
    "RADIANS_IN_CIRCLE",
    "aberrance_degrees",
    "to_degrees",
    "to_radians",
    "wrap_to_one_turn",
    "COMMAND_ROTATE_BACKWARD",
    "COMMAND_ROTATE_FORWARD",
    "LEFT_ROTOR_NAME",
    "RIGHT_ROTOR_NAME",
    "DrillerController",
    "TickRate",
    "UpdateSource",
    "is_invoked_by_user",
    "ConfigurationError",
    "DrillerError",
    "HardwareReadFailure",
    "HardwareWriteFailure",
    "TickRunner",
    "ROTATION_CALIBER_DEGREES",
    "ROTATION_VELOCITY",
    "Direction",
    "RotationStep",
    "limit_window",
    "plan_rotation",
    "rotation_increments",
    "ActuatorPair",
    "RotorRegistry",
    "Side",
    "SimulatedRotor",
    "SerialRotor",
    "hex_to_radians",
    "radians_to_hex",
]

__version__ = "0.1.0"
