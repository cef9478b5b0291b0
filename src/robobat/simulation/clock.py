"""Fixed-period ticking that drives the simulation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from robobat.constants import DEFAULT_TICK_SECONDS
from robobat.simulation.container import SimulationContainer
from robobat.simulation.machine import BatteryStateMachine, StepResult
from robobat.simulation.models import HistorySample
from robobat.utils import TimeUtils

if TYPE_CHECKING:
    from robobat.notifications.sink import NotificationSink

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class TickHandle(Protocol):
    """Cancellation handle for a recurring callback."""

    @property
    def active(self) -> bool:
        """True until cancelled."""
        ...

    def cancel(self) -> None:
        """Stop future invocations. Safe to call more than once."""
        ...


@runtime_checkable
class Ticker(Protocol):
    """Schedules a callback at a fixed period."""

    def call_every(self, period: float, callback: Callable[[], object]) -> TickHandle:
        """Invoke ``callback`` every ``period`` seconds until the handle is cancelled.

        Args:
            period: Seconds between invocations (first one after one period)
            callback: Zero-argument callable

        Returns:
            Handle used to cancel the schedule
        """
        ...


class _LoopHandle:
    """Repeating asyncio timer with at most one pending TimerHandle."""

    def __init__(
        self, loop: asyncio.AbstractEventLoop, period: float, callback: Callable[[], object]
    ) -> None:
        self._loop = loop
        self._period = period
        self._callback = callback
        self._cancelled = False
        self._timer = loop.call_later(period, self._fire)

    @property
    def active(self) -> bool:
        return not self._cancelled

    def _fire(self) -> None:
        if self._cancelled:
            return
        # Re-arm first so the callback may cancel its own schedule
        self._timer = self._loop.call_later(self._period, self._fire)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()


class LoopTicker:
    """Ticker backed by the running asyncio event loop.

    All callbacks run on the loop thread, one at a time.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_every(self, period: float, callback: Callable[[], object]) -> TickHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _LoopHandle(loop, period, callback)


class _ManualHandle:
    def __init__(self, period: float, callback: Callable[[], object], due: float) -> None:
        self.period = period
        self.callback = callback
        self.due = due
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualTicker:
    """Virtual-time ticker; nothing fires until ``advance`` is called.

    Used by the headless ``simulate`` command and by tests that need to
    step the simulation deterministically.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._handles: list[_ManualHandle] = []

    def call_every(self, period: float, callback: Callable[[], object]) -> TickHandle:
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        handle = _ManualHandle(period, callback, self.now + period)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        """Number of schedules that can still fire."""
        return sum(1 for h in self._handles if h.active)

    def advance(self, seconds: float) -> int:
        """Move virtual time forward, firing due callbacks in time order.

        Args:
            seconds: How far to advance

        Returns:
            Number of callbacks fired
        """
        target = self.now + seconds
        fired = 0
        while True:
            due = [h for h in self._handles if h.active and h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            self.now = handle.due
            handle.due += handle.period
            handle.callback()
            fired += 1
        self.now = target
        self._handles = [h for h in self._handles if h.active]
        return fired


class SimulationClock:
    """Runs one simulation step per period.

    Each tick reads the threshold from the container at call time, stores
    the next state, appends a chart sample and forwards events to the
    notification sink. ``restart`` re-arms the schedule after a
    configuration change so the next tick is a full period away.
    """

    def __init__(
        self,
        container: SimulationContainer,
        machine: BatteryStateMachine,
        sink: NotificationSink,
        ticker: Ticker,
        period: float = DEFAULT_TICK_SECONDS,
        clock: Callable[[], datetime] = TimeUtils.now_localized,
        time_format: str = "%H:%M:%S",
    ) -> None:
        """Initialize the clock.

        Args:
            container: Shared simulation state (written on every tick)
            machine: State machine computing each step
            sink: Receiver of emitted events
            ticker: Scheduler providing the fixed period
            period: Seconds between ticks
            clock: Wall-clock source for sample labels
            time_format: strftime format for sample labels
        """
        self.container = container
        self.machine = machine
        self.sink = sink
        self.ticker = ticker
        self.period = period
        self.clock = clock
        self.time_format = time_format
        self._handle: TickHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.active

    def tick(self) -> StepResult:
        """Advance the simulation by one step."""
        threshold = self.container.threshold
        result = self.machine.step(self.container.state, threshold)

        self.container.state = result.state
        self.container.history.append(
            HistorySample(
                time=TimeUtils.format_datetime(self.clock(), self.time_format),
                level=round(result.state.level, 1),
            )
        )
        self.container.ticks += 1

        logger.debug(
            "Tick %d: level=%.1f%% voltage=%.2fV temp=%.1f°C status=%s",
            self.container.ticks,
            result.state.level,
            result.state.voltage,
            result.state.temperature,
            result.state.status.value,
        )

        for event in result.events:
            self.sink.notify(event)
        return result

    def start(self) -> TickHandle:
        """Begin ticking; returns the existing handle if already running."""
        if self._handle is not None and self._handle.active:
            return self._handle
        self._handle = self.ticker.call_every(self.period, self.tick)
        logger.info("Simulation clock started (period %.2fs)", self.period)
        return self._handle

    def stop(self) -> None:
        """Cancel the schedule; no tick fires afterwards."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.info("Simulation clock stopped")

    def restart(self) -> TickHandle:
        self.stop()
        return self.start()
