#!/usr/bin/env python3
"""
Basic Usage Example for Driller Controller
Demonstrates stepping a drill rotor pair forward and backward, on serial
drives or on simulated rotors.
"""

import sys

from loguru import logger

from driller_controller import (
    COMMAND_ROTATE_BACKWARD,
    COMMAND_ROTATE_FORWARD,
    LEFT_ROTOR_NAME,
    RIGHT_ROTOR_NAME,
    DrillerController,
    RotorRegistry,
    SerialRotor,
    SimulatedRotor,
    TickRunner,
    to_degrees,
    to_radians,
)

# Configuration
SERIAL_PORT = "/dev/ttyUSB0"  # <-- IMPORTANT: Replace with your serial port name
RIGHT_ADDRESS = 1             # <-- IMPORTANT: Replace with the right drive's address (0-F)
LEFT_ADDRESS = 2              # <-- IMPORTANT: Replace with the left drive's address (0-F)
SIMULATE = True               # Set to False to drive real rotors over SERIAL_PORT

# Configure Loguru for detailed output
logger.remove()
logger.add(sys.stderr, level="DEBUG")  # "TRACE" also shows serial traffic

if SIMULATE:
    start = to_radians(92)
    registry = RotorRegistry({
        RIGHT_ROTOR_NAME: SimulatedRotor(RIGHT_ROTOR_NAME, angle=start),
        LEFT_ROTOR_NAME: SimulatedRotor(LEFT_ROTOR_NAME, angle=start),
    })
    runner = TickRunner(sleep=lambda seconds: None)
    for name in (RIGHT_ROTOR_NAME, LEFT_ROTOR_NAME):
        runner.add_frame_hook(registry.resolve_actuator(name).advance)
else:
    right = SerialRotor(SERIAL_PORT, address=RIGHT_ADDRESS, name=RIGHT_ROTOR_NAME)
    left = SerialRotor(right.serial, address=LEFT_ADDRESS, name=LEFT_ROTOR_NAME)
    registry = RotorRegistry({RIGHT_ROTOR_NAME: right, LEFT_ROTOR_NAME: left})
    runner = TickRunner()

controller = DrillerController(registry, runner)
runner.attach(controller)

for command in (COMMAND_ROTATE_FORWARD, COMMAND_ROTATE_FORWARD, COMMAND_ROTATE_BACKWARD):
    logger.info(f"\n--- {command} ---")
    runner.command(command)
    if runner.run_until_idle(timeout=30.0):
        right_angle = registry.resolve_actuator(RIGHT_ROTOR_NAME).angle
        logger.info(f"Step complete. Right rotor at {to_degrees(right_angle)} deg")
    else:
        logger.error("Step did not complete in time.")
        break

logger.info("\nExample finished.")
