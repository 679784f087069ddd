"""
Driller Rotor Pair Controller

This module implements the DrillerController state machine that steps a
mirrored pair of rotors forward or backward by one caliber per command.

The controller is driven from outside: user commands arrive through
``main()`` with a terminal or trigger source, and the host calls ``main()``
again at the cadence the controller requests while a step is running.
"""

from enum import Enum
from typing import Optional

from loguru import logger

from .errors import ConfigurationError, DrillerError
from .planner import (
    ROTATION_CALIBER_DEGREES,
    ROTATION_VELOCITY,
    Direction,
    RotationStep,
    plan_rotation,
)
from .rotors import ActuatorPair, Side

RIGHT_ROTOR_NAME = "DrillRotorR"
LEFT_ROTOR_NAME = "DrillRotorL"

COMMAND_ROTATE_FORWARD = "RotateForward"
COMMAND_ROTATE_BACKWARD = "RotateBackward"


class UpdateSource(Enum):
    """What caused an invocation of the controller."""
    NONE = "none"
    TERMINAL = "terminal"
    TRIGGER = "trigger"
    UPDATE1 = "update1"
    UPDATE10 = "update10"
    UPDATE100 = "update100"
    ONCE = "once"


# Sources that carry a user command; everything else is a state check.
USER_SOURCES = (UpdateSource.TERMINAL, UpdateSource.TRIGGER)


class TickRate(Enum):
    """Periodic cadence requested from the host, in host frames per tick."""
    NONE = 0
    FREQUENT = 10


def is_invoked_by_user(source: UpdateSource) -> bool:
    return source in USER_SOURCES


class DrillerController:
    def __init__(
        self,
        resolver,
        scheduler,
        right_name: str = RIGHT_ROTOR_NAME,
        left_name: str = LEFT_ROTOR_NAME,
        caliber_degrees: int = ROTATION_CALIBER_DEGREES,
        velocity: float = ROTATION_VELOCITY,
        name: Optional[str] = None,
    ):
        if not isinstance(caliber_degrees, int) or caliber_degrees <= 0:
            raise ConfigurationError(f"Caliber must be a positive whole number of degrees, got {caliber_degrees!r}.")
        if not velocity > 0:
            raise ConfigurationError(f"Rotation velocity must be positive, got {velocity!r}.")
        self.name = name or "Driller"
        self.logger = logger.bind(controller=self.name)
        self.caliber_degrees = caliber_degrees
        self.velocity = velocity
        self.scheduler = scheduler

        right = resolver.resolve_actuator(right_name)
        left = resolver.resolve_actuator(left_name)
        self.rotors = ActuatorPair(right, left)
        self.logger.debug(f"Resolved rotors '{right_name}' (right) and '{left_name}' (left)")

        self._state = Direction.IDLE
        self.last_steps = None
        self._change_state_idle()

    @property
    def state(self) -> Direction:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state is Direction.IDLE

    def main(self, argument: Optional[str], source: UpdateSource) -> Direction:
        """Handle one invocation and return the state afterwards."""
        if self._state is Direction.IDLE:
            self._process_idle(argument, source)
        # While rotating, user commands are handled as state checks too.
        elif self._state is Direction.FORWARD:
            self._process_rotate_forward()
        else:
            self._process_rotate_backward()
        return self._state

    # --- State handlers ---

    def _process_idle(self, argument: Optional[str], source: UpdateSource) -> None:
        if not is_invoked_by_user(source):
            self.logger.trace(f"Idle: ignoring {source.name} tick")
            return
        if argument == COMMAND_ROTATE_FORWARD:
            self._change_state_rotate(Direction.FORWARD)
        elif argument == COMMAND_ROTATE_BACKWARD:
            self._change_state_rotate(Direction.BACKWARD)
        else:
            self.logger.trace(f"Idle: ignoring unknown command {argument!r}")

    def _process_rotate_forward(self) -> None:
        right_angle = self.rotors.read_angle(Side.RIGHT)
        left_angle = self.rotors.read_angle(Side.LEFT)
        _, right_upper = self.rotors.read_limits(Side.RIGHT)
        left_lower, _ = self.rotors.read_limits(Side.LEFT)
        self.logger.debug(f"Forward check: right {right_angle:.5f}/{right_upper:.5f}, left {left_angle:.5f}/{left_lower:.5f}")
        # Either rotor reaching its limit ends the step.
        if right_angle >= right_upper or left_angle <= left_lower:
            self._change_state_idle()

    def _process_rotate_backward(self) -> None:
        right_angle = self.rotors.read_angle(Side.RIGHT)
        left_angle = self.rotors.read_angle(Side.LEFT)
        right_lower, _ = self.rotors.read_limits(Side.RIGHT)
        _, left_upper = self.rotors.read_limits(Side.LEFT)
        self.logger.debug(f"Backward check: right {right_angle:.5f}/{right_lower:.5f}, left {left_angle:.5f}/{left_upper:.5f}")
        if right_angle <= right_lower or left_angle >= left_upper:
            self._change_state_idle()

    # --- Transitions ---

    def _change_state_idle(self) -> None:
        self._stop_rotors()
        self.scheduler.set_periodic_rate(TickRate.NONE)
        previous = self._state
        self._state = Direction.IDLE
        self.logger.info(f"{previous.name} -> IDLE")

    def _change_state_rotate(self, direction: Direction) -> None:
        self._state = direction
        self.logger.info(f"IDLE -> {direction.name}")
        try:
            self._rotate_rotors()
        except DrillerError as e:
            self.logger.error(f"Could not start {direction.name} step: {e}")
            self._change_state_idle()
            raise
        self.scheduler.set_periodic_rate(TickRate.FREQUENT)

    def _stop_rotors(self) -> None:
        self.rotors.lock(True)
        self.rotors.set_velocity(Side.RIGHT, 0.0)
        self.rotors.set_velocity(Side.LEFT, 0.0)

    def _rotate_rotors(self) -> None:
        right_step, left_step = plan_rotation(
            self._state,
            self.rotors.read_angle(Side.RIGHT),
            self.rotors.read_angle(Side.LEFT),
            caliber_degrees=self.caliber_degrees,
            velocity=self.velocity,
        )
        self._apply_step(Side.RIGHT, right_step)
        self._apply_step(Side.LEFT, left_step)
        self.rotors.lock(False)
        self.last_steps = (right_step, left_step)

    def _apply_step(self, side: Side, step: RotationStep) -> None:
        self.logger.debug(
            f"{side.name}: step {step.increment:.5f} rad, limits [{step.lower_limit:.5f}, {step.upper_limit:.5f}], "
            f"velocity {step.velocity:+.2f} rad/s"
        )
        self.rotors.set_limits(side, step.lower_limit, step.upper_limit)
        self.rotors.set_velocity(side, step.velocity)
