#!/usr/bin/env python3
"""
Tests for the TickRunner host.
"""

import itertools

import pytest
from unittest.mock import MagicMock

from driller_controller import (
    COMMAND_ROTATE_BACKWARD,
    COMMAND_ROTATE_FORWARD,
    Direction,
    DrillerController,
    TickRate,
    TickRunner,
    UpdateSource,
    to_radians,
)


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def runner(sleep):
    return TickRunner(sleep=sleep)


@pytest.fixture
def simulated(make_registry, runner):
    """A controller on simulated rotors at 92 degrees, driven by the runner."""
    registry = make_registry(92.0)
    for name in ("DrillRotorR", "DrillRotorL"):
        runner.add_frame_hook(registry.resolve_actuator(name).advance)
    controller = DrillerController(registry, runner)
    runner.attach(controller)
    return controller, registry


def test_rate_starts_cancelled(runner):
    assert runner.rate is TickRate.NONE
    assert runner.tick_seconds == 0.0


def test_set_periodic_rate(runner):
    runner.set_periodic_rate(TickRate.FREQUENT)
    assert runner.rate is TickRate.FREQUENT
    assert runner.tick_seconds == pytest.approx(10 / 60)


def test_requires_controller(runner):
    with pytest.raises(RuntimeError, match="No controller attached"):
        runner.command(COMMAND_ROTATE_FORWARD)
    with pytest.raises(RuntimeError):
        runner.tick()


def test_command_is_user_originated(runner):
    controller = MagicMock()
    runner.attach(controller)
    runner.command(COMMAND_ROTATE_FORWARD)
    runner.command(COMMAND_ROTATE_BACKWARD, source=UpdateSource.TRIGGER)
    assert controller.main.call_args_list[0].args == (COMMAND_ROTATE_FORWARD, UpdateSource.TERMINAL)
    assert controller.main.call_args_list[1].args == (COMMAND_ROTATE_BACKWARD, UpdateSource.TRIGGER)


def test_tick_source_matches_cadence(runner):
    controller = MagicMock()
    runner.attach(controller)
    runner.set_periodic_rate(TickRate.FREQUENT)
    runner.tick()
    controller.main.assert_called_once_with("", UpdateSource.UPDATE10)


def test_frame_hooks_receive_tick_period(runner):
    hook = MagicMock()
    runner.add_frame_hook(hook)
    runner.attach(MagicMock())
    runner.set_periodic_rate(TickRate.FREQUENT)
    runner.tick()
    hook.assert_called_once_with(pytest.approx(10 / 60))


def test_run_until_idle_returns_immediately_when_idle(runner, sleep):
    runner.attach(MagicMock())
    assert runner.run_until_idle() is True
    sleep.assert_not_called()


def test_run_until_idle_max_ticks(runner, sleep):
    controller = MagicMock()
    runner.attach(controller)
    runner.set_periodic_rate(TickRate.FREQUENT)
    assert runner.run_until_idle(max_ticks=3) is False
    assert controller.main.call_count == 3
    sleep.assert_called_with(pytest.approx(10 / 60))


def test_run_until_idle_timeout(sleep):
    runner = TickRunner(sleep=sleep, clock=itertools.count(0, 1.0).__next__)
    controller = MagicMock()
    runner.attach(controller)
    runner.set_periodic_rate(TickRate.FREQUENT)
    assert runner.run_until_idle(timeout=2.5) is False
    assert controller.main.call_count == 2


def test_forward_step_runs_to_completion(simulated, runner):
    controller, registry = simulated
    right = registry.resolve_actuator("DrillRotorR")
    left = registry.resolve_actuator("DrillRotorL")

    assert runner.command(COMMAND_ROTATE_FORWARD) is Direction.FORWARD
    assert runner.rate is TickRate.FREQUENT
    assert runner.run_until_idle(max_ticks=50) is True

    assert controller.state is Direction.IDLE
    assert runner.rate is TickRate.NONE
    assert runner.ticks_delivered == 2
    assert right.angle == pytest.approx(to_radians(95))
    assert left.angle == pytest.approx(to_radians(90))
    assert right.locked and left.locked


def test_forward_then_backward_returns_to_grid(simulated, runner):
    controller, registry = simulated
    right = registry.resolve_actuator("DrillRotorR")

    runner.command(COMMAND_ROTATE_FORWARD)
    assert runner.run_until_idle(max_ticks=50)
    assert right.angle == pytest.approx(to_radians(95))

    runner.command(COMMAND_ROTATE_BACKWARD)
    assert runner.run_until_idle(max_ticks=50)
    assert right.angle == pytest.approx(to_radians(90))
    assert runner.ticks_delivered == 5


def test_periodic_ticks_do_not_start_rotation(simulated, runner):
    controller, registry = simulated
    runner.set_periodic_rate(TickRate.FREQUENT)
    runner.tick()
    assert controller.state is Direction.IDLE
