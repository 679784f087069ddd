#!/usr/bin/env python3
"""
Command-line interface for driller-controller.

This script steps a drill rotor pair by one caliber, either on real drives
over a serial port or on simulated rotors.
"""

import argparse
import sys

import serial
from loguru import logger

from driller_controller import (
    COMMAND_ROTATE_BACKWARD,
    COMMAND_ROTATE_FORWARD,
    LEFT_ROTOR_NAME,
    RIGHT_ROTOR_NAME,
    ROTATION_CALIBER_DEGREES,
    ROTATION_VELOCITY,
    DrillerController,
    DrillerError,
    RotorRegistry,
    SerialRotor,
    SimulatedRotor,
    TickRunner,
    to_degrees,
    to_radians,
)

COMMANDS = {
    'rotate-forward': COMMAND_ROTATE_FORWARD,
    'rotate-backward': COMMAND_ROTATE_BACKWARD,
}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Driller Rotor Pair Controller CLI")

    parser.add_argument('--port', '-p', type=str, default='/dev/ttyUSB0',
                        help='Serial port shared by both rotor drives (default: /dev/ttyUSB0)')
    parser.add_argument('--right-address', type=str, default='1',
                        help='Address of the right rotor drive (default: 1)')
    parser.add_argument('--left-address', type=str, default='2',
                        help='Address of the left rotor drive (default: 2)')

    parser.add_argument('--simulate', action='store_true',
                        help='Use simulated rotors instead of serial drives')
    parser.add_argument('--start-angle', type=float, default=0.0,
                        help='Starting angle of the simulated rotors in degrees (default: 0)')

    parser.add_argument('--caliber', type=int, default=ROTATION_CALIBER_DEGREES,
                        help=f'Step size in whole degrees (default: {ROTATION_CALIBER_DEGREES})')
    parser.add_argument('--velocity', type=float, default=ROTATION_VELOCITY,
                        help=f'Rotation speed in rad/s (default: {ROTATION_VELOCITY})')
    parser.add_argument('--timeout', '-t', type=float, default=30.0,
                        help='Seconds to wait for a step to finish (default: 30)')

    parser.add_argument('--log-level', '-l', type=str, default='INFO',
                        choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set the logging level (default: INFO)')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')
    subparsers.add_parser('rotate-forward', help='Step the rotor pair forward by one caliber')
    subparsers.add_parser('rotate-backward', help='Step the rotor pair backward by one caliber')
    subparsers.add_parser('status', help='Show rotor angles and limits')

    return parser.parse_args(argv)


def build_registry(args):
    """Create the named rotors for the selected backend."""
    if args.simulate:
        start = to_radians(args.start_angle)
        return RotorRegistry({
            RIGHT_ROTOR_NAME: SimulatedRotor(RIGHT_ROTOR_NAME, angle=start),
            LEFT_ROTOR_NAME: SimulatedRotor(LEFT_ROTOR_NAME, angle=start),
        })
    port = serial.Serial(port=args.port, baudrate=9600, bytesize=8, parity="N", stopbits=1, timeout=1)
    return RotorRegistry({
        RIGHT_ROTOR_NAME: SerialRotor(port, address=args.right_address, name=RIGHT_ROTOR_NAME),
        LEFT_ROTOR_NAME: SerialRotor(port, address=args.left_address, name=LEFT_ROTOR_NAME),
    })


def log_status(registry):
    for name in (RIGHT_ROTOR_NAME, LEFT_ROTOR_NAME):
        rotor = registry.resolve_actuator(name)
        logger.info(
            f"  {name}: angle {to_degrees(rotor.angle)} deg, "
            f"limits [{to_degrees(rotor.lower_limit)}, {to_degrees(rotor.upper_limit)}] deg"
        )


def main(argv=None):
    """Main CLI function."""
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level, format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")

    if not args.command:
        logger.error("No command specified. Use --help for usage information.")
        return 1

    try:
        registry = build_registry(args)
    except serial.SerialException as e:
        logger.error(f"Could not open serial port {args.port}: {e}")
        return 1

    if args.simulate:
        runner = TickRunner(sleep=lambda seconds: None)
        for name in (RIGHT_ROTOR_NAME, LEFT_ROTOR_NAME):
            runner.add_frame_hook(registry.resolve_actuator(name).advance)
    else:
        runner = TickRunner()

    try:
        controller = DrillerController(
            registry, runner, caliber_degrees=args.caliber, velocity=args.velocity
        )
        runner.attach(controller)

        if args.command == 'status':
            logger.info("Rotor Status:")
            log_status(registry)
            return 0

        runner.command(COMMANDS[args.command])
        if not runner.run_until_idle(timeout=args.timeout):
            logger.error("Step did not complete; rotors left unlocked.")
            return 1
        logger.info("Step complete.")
        log_status(registry)

    except DrillerError as e:
        logger.error(f"Error during operation: {e}")
        return 1
    finally:
        if not args.simulate:
            # Both drives share one port.
            registry.resolve_actuator(RIGHT_ROTOR_NAME).close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
