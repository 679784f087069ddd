"""
Tick host for the driller controller.

TickRunner plays the part of the host scheduler: it records the cadence the
controller asks for, forwards user commands, and keeps calling the
controller with periodic ticks until it stops asking for them.
"""

import time
from typing import Callable, List, Optional

from loguru import logger

from .controller import TickRate, UpdateSource

FRAMES_PER_SECOND = 60

_TICK_SOURCES = {
    1: UpdateSource.UPDATE1,
    10: UpdateSource.UPDATE10,
    100: UpdateSource.UPDATE100,
}


class TickRunner:
    def __init__(
        self,
        frame_seconds: float = 1.0 / FRAMES_PER_SECOND,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.frame_seconds = frame_seconds
        self.rate = TickRate.NONE
        self.controller = None
        self.ticks_delivered = 0
        self._sleep = sleep
        self._clock = clock
        self._frame_hooks: List[Callable[[float], None]] = []

    def attach(self, controller) -> None:
        self.controller = controller

    def add_frame_hook(self, hook: Callable[[float], None]) -> None:
        """Register a callable run with the elapsed seconds before each tick."""
        self._frame_hooks.append(hook)

    def set_periodic_rate(self, rate: TickRate) -> None:
        if rate is not self.rate:
            logger.debug(f"Periodic rate {self.rate.name} -> {rate.name}")
        self.rate = rate

    @property
    def tick_seconds(self) -> float:
        return self.rate.value * self.frame_seconds

    def command(self, argument: str, source: UpdateSource = UpdateSource.TERMINAL):
        """Deliver a user command to the controller."""
        if self.controller is None:
            raise RuntimeError("No controller attached to the tick runner.")
        logger.info(f"Command '{argument}' ({source.name})")
        return self.controller.main(argument, source)

    def tick(self):
        """Run the frame hooks for one tick period and deliver one periodic tick."""
        if self.controller is None:
            raise RuntimeError("No controller attached to the tick runner.")
        elapsed = self.tick_seconds
        for hook in self._frame_hooks:
            hook(elapsed)
        self.ticks_delivered += 1
        source = _TICK_SOURCES.get(self.rate.value, UpdateSource.ONCE)
        return self.controller.main("", source)

    def run_until_idle(self, timeout: Optional[float] = None, max_ticks: Optional[int] = None) -> bool:
        """Deliver periodic ticks while a cadence is requested.

        Returns True once the controller has cancelled its cadence, False if
        ``timeout`` seconds or ``max_ticks`` ticks pass first.
        """
        start_time = self._clock()
        ticks = 0
        while self.rate is not TickRate.NONE:
            if timeout is not None and (self._clock() - start_time) >= timeout:
                logger.warning(f"Rotation did not finish within {timeout:.1f}s")
                return False
            if max_ticks is not None and ticks >= max_ticks:
                logger.warning(f"Rotation did not finish within {max_ticks} ticks")
                return False
            self._sleep(self.tick_seconds)
            self.tick()
            ticks += 1
        return True
