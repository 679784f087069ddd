"""
Exception types raised by the driller controller.
"""


class DrillerError(Exception):
    """Base exception for driller controller errors."""

    pass


class ConfigurationError(DrillerError):
    """A rotor could not be resolved or the controller was misconfigured."""

    pass


class HardwareWriteFailure(DrillerError):
    """A rotor rejected a write (limits, velocity or lock)."""

    pass


class HardwareReadFailure(DrillerError):
    """A rotor did not return a usable reading."""

    pass
