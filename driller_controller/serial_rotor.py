"""
Serial Rotor Drive Adapter

This module implements SerialRotor, a rotor handle that forwards angle,
limit, velocity and lock access to a rotor drive over a serial line.

Framing follows the Elliptec ASCII style: a one-character address, a
two-letter command and optional hex data terminated by ``\\r``. The drive
answers with the address, an upper-case reply code and data, terminated by
``\\r\\n``. Angles travel as signed 32-bit pulse counts.
"""

import threading
import time
from typing import Any, Optional, Union

import serial
from loguru import logger

from .angles import RADIANS_IN_CIRCLE
from .errors import HardwareReadFailure, HardwareWriteFailure

STATUS_OK = "00"

COMMAND_GET_ANGLE = "gp"
COMMAND_GET_LOWER_LIMIT = "gl"
COMMAND_GET_UPPER_LIMIT = "gu"
COMMAND_SET_LOWER_LIMIT = "sl"
COMMAND_SET_UPPER_LIMIT = "su"
COMMAND_SET_VELOCITY = "sv"
COMMAND_LOCK = "lk"

REPLY_ANGLE = "PO"
REPLY_LIMIT = "LI"
REPLY_STATUS = "GS"

DEFAULT_PULSES_PER_REVOLUTION = 262144


def radians_to_hex(radians: float, pulse_per_revolution: int = DEFAULT_PULSES_PER_REVOLUTION) -> str:
    pulses = int(round(radians * pulse_per_revolution / RADIANS_IN_CIRCLE))
    if pulses < 0:
        pulses = (1 << 32) + pulses
    return format(pulses & 0xFFFFFFFF, "08x").upper()


def hex_to_radians(hex_val: str, pulse_per_revolution: int = DEFAULT_PULSES_PER_REVOLUTION) -> float:
    value = int(hex_val.strip(" \r\n\t"), 16)
    if value & 0x80000000:
        value = value - (1 << 32)
    return value * RADIANS_IN_CIRCLE / pulse_per_revolution


class SerialRotor:
    def __init__(
        self,
        port: Union[str, serial.Serial, Any],
        address: Union[int, str] = 0,
        name: Optional[str] = None,
        pulse_per_revolution: int = DEFAULT_PULSES_PER_REVOLUTION,
        timeout: float = 1.0,
    ):
        self.address = format(address, "X") if isinstance(address, int) else str(address)
        self.name = name or f"Rotor-{self.address}"
        self.logger = logger.bind(rotor_name=self.name, address=self.address)
        self.pulse_per_revolution = pulse_per_revolution
        self.timeout = timeout
        self._command_lock = threading.RLock()
        self._target_velocity = 0.0
        self._locked: Optional[bool] = None

        if isinstance(port, str):
            self.serial = serial.Serial(port=port, baudrate=9600, bytesize=8, parity="N", stopbits=1, timeout=1)
        elif hasattr(port, "write") and hasattr(port, "read"):
            self.serial = port
        else:
            raise ValueError(f"Unsupported port type: {type(port)}. Must be str, serial.Serial, or a compatible mock.")

    def send_command(self, command: str, data: str = "") -> str:
        """Send one command and return the reply addressed to this rotor, or ""."""
        with self._command_lock:
            cmd_str = f"{self.address}{command}{data}\r"
            self.logger.trace(f"Sending: '{cmd_str.strip()}'")
            try:
                if not self.serial.is_open:
                    self.serial.open()
                self.serial.reset_input_buffer()
                self.serial.write(cmd_str.encode("ascii"))
                self.serial.flush()
            except serial.SerialException as e:
                self.logger.error(f"Error writing to serial port: {e}")
                return ""

            start_time = time.time()
            response_bytes = b""
            try:
                while (time.time() - start_time) < self.timeout:
                    if self.serial.in_waiting > 0:
                        response_bytes += self.serial.read(self.serial.in_waiting)
                        if response_bytes.endswith(b"\r\n"):
                            break
                    else:
                        time.sleep(0.01)
            except serial.SerialException as e:
                self.logger.error(f"Error reading from serial port: {e}")
                return ""

            response_str = response_bytes.decode("ascii", errors="replace").strip()
            duration_ms = (time.time() - start_time) * 1000
            self.logger.trace(f"Response: '{response_str}' (took {duration_ms:.1f}ms)")
            if not response_str:
                self.logger.warning(f"No response or timed out after {self.timeout:.2f}s")
                return ""
            if response_str.upper().startswith(self.address.upper()):
                return response_str
            self.logger.warning(f"Response ('{response_str}') did not match address '{self.address}'. Discarding.")
            return ""

    def _query(self, command: str, reply_code: str) -> str:
        response = self.send_command(command)
        expected_prefix = f"{self.address}{reply_code}"
        if not response.startswith(expected_prefix):
            raise HardwareReadFailure(f"{self.name}: no valid reply to '{command}' (got '{response}').")
        return response[len(expected_prefix):].strip()

    def _write(self, command: str, data: str) -> None:
        response = self.send_command(command, data)
        expected_prefix = f"{self.address}{REPLY_STATUS}"
        if not response.startswith(expected_prefix):
            raise HardwareWriteFailure(f"{self.name}: no status reply to '{command}{data}' (got '{response}').")
        status = response[len(expected_prefix):].strip()
        if status != STATUS_OK:
            raise HardwareWriteFailure(f"{self.name}: '{command}{data}' rejected with status {status}.")

    def _read_radians(self, command: str, reply_code: str) -> float:
        hex_val = self._query(command, reply_code)
        try:
            return hex_to_radians(hex_val, self.pulse_per_revolution)
        except ValueError:
            raise HardwareReadFailure(f"{self.name}: could not parse '{hex_val}' from '{command}'.") from None

    @property
    def angle(self) -> float:
        return self._read_radians(COMMAND_GET_ANGLE, REPLY_ANGLE)

    @property
    def lower_limit(self) -> float:
        return self._read_radians(COMMAND_GET_LOWER_LIMIT, REPLY_LIMIT)

    @lower_limit.setter
    def lower_limit(self, radians: float):
        self._write(COMMAND_SET_LOWER_LIMIT, radians_to_hex(radians, self.pulse_per_revolution))

    @property
    def upper_limit(self) -> float:
        return self._read_radians(COMMAND_GET_UPPER_LIMIT, REPLY_LIMIT)

    @upper_limit.setter
    def upper_limit(self, radians: float):
        self._write(COMMAND_SET_UPPER_LIMIT, radians_to_hex(radians, self.pulse_per_revolution))

    @property
    def target_velocity(self) -> float:
        # The drive has no velocity query; this is the last value written.
        return self._target_velocity

    @target_velocity.setter
    def target_velocity(self, radians_per_second: float):
        self._write(COMMAND_SET_VELOCITY, radians_to_hex(radians_per_second, self.pulse_per_revolution))
        self._target_velocity = radians_per_second

    @property
    def locked(self) -> Optional[bool]:
        return self._locked

    @locked.setter
    def locked(self, value: bool):
        self._write(COMMAND_LOCK, "1" if value else "0")
        self._locked = bool(value)

    def close(self) -> None:
        if self.serial.is_open:
            self.serial.close()
