"""
Configuration for pytest.

This file contains configuration and shared fixtures for pytest when running
tests for the driller_controller package.
"""

import os
import sys

import pytest

# Make the package available for imports during testing
package_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if package_root not in sys.path:
    sys.path.insert(0, package_root)

from driller_controller import RotorRegistry, SimulatedRotor, to_radians  # noqa: E402


@pytest.fixture
def make_registry():
    """Build a registry holding a right and left simulated rotor at the given angles (degrees)."""
    def _make(right_deg=92.0, left_deg=None):
        if left_deg is None:
            left_deg = right_deg
        return RotorRegistry({
            "DrillRotorR": SimulatedRotor("DrillRotorR", angle=to_radians(right_deg)),
            "DrillRotorL": SimulatedRotor("DrillRotorL", angle=to_radians(left_deg)),
        })
    return _make
