#!/usr/bin/env python3
"""
Tests for the driller-controller command-line interface.
"""

import pytest
import serial
from unittest.mock import patch

from driller_controller import cli


def test_parse_args_defaults():
    args = cli.parse_args(["status"])
    assert args.port == "/dev/ttyUSB0"
    assert args.right_address == "1"
    assert args.left_address == "2"
    assert args.caliber == 5
    assert args.velocity == pytest.approx(0.20)
    assert args.simulate is False
    assert args.command == "status"


def test_no_command():
    assert cli.main(["--simulate"]) == 1


@pytest.mark.parametrize("command", ["rotate-forward", "rotate-backward"])
def test_simulated_step(command):
    assert cli.main(["--simulate", "--start-angle", "92", "--log-level", "ERROR", command]) == 0


def test_simulated_status():
    assert cli.main(["--simulate", "--log-level", "ERROR", "status"]) == 0


def test_bad_caliber_fails():
    assert cli.main(["--simulate", "--caliber", "0", "--log-level", "CRITICAL", "rotate-forward"]) == 1


@patch('driller_controller.cli.serial.Serial', side_effect=serial.SerialException("no such port"))
def test_serial_port_failure(mock_serial_class):
    assert cli.main(["--port", "/dev/none", "--log-level", "CRITICAL", "status"]) == 1
    mock_serial_class.assert_called_once()


def test_build_registry_simulated():
    args = cli.parse_args(["--simulate", "--start-angle", "45", "status"])
    registry = cli.build_registry(args)
    right = registry.resolve_actuator("DrillRotorR")
    assert right.angle == pytest.approx(0.785398, abs=1e-6)


def _acknowledging_port():
    from test_serial_rotor import MockSerial
    port = MockSerial()
    port.acknowledge_writes = True
    for address in ("1", "2"):
        port.set_response(f"{address}gp", f"{address}PO00000000\r\n".encode())
        port.set_response(f"{address}gl", f"{address}LI00000000\r\n".encode())
        port.set_response(f"{address}gu", f"{address}LI00000000\r\n".encode())
    return port


def test_serial_port_closed_after_status():
    port = _acknowledging_port()
    with patch('driller_controller.cli.serial.Serial', return_value=port):
        assert cli.main(["--log-level", "CRITICAL", "status"]) == 0
    assert port.is_open is False


def test_serial_port_closed_after_failure():
    port = _acknowledging_port()
    port.acknowledge_writes = False
    port.set_response("1lk1", b"1GS02\r\n")
    with patch('driller_controller.cli.serial.Serial', return_value=port):
        assert cli.main(["--log-level", "CRITICAL", "rotate-forward"]) == 1
    assert port.is_open is False
