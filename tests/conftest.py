import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from robobat.notifications.sink import NotificationSink
from robobat.settings import UserSettings
from robobat.simulation.clock import ManualTicker, SimulationClock
from robobat.simulation.container import SimulationContainer
from robobat.simulation.machine import BatteryStateMachine


class FakeClock:
    """Wall clock the test moves by hand."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2025, 5, 3, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def config() -> UserSettings:
    return UserSettings(
        threshold=20,
        tick_seconds=1.0,
        seed=7,
        theme="dark",
        notification_seconds=5.0,
        time_format_sample="%H:%M:%S",
        time_format_log="%H:%M",
        timezone="UTC",
        log_entries=6,
        log_spacing_minutes=10,
    )


@pytest.fixture
def container() -> SimulationContainer:
    return SimulationContainer()


@pytest.fixture
def sink(fake_clock: FakeClock) -> NotificationSink:
    return NotificationSink(clock=fake_clock)


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def make_clock(
    container: SimulationContainer,
    sink: NotificationSink,
    ticker: ManualTicker,
    fake_clock: FakeClock,
) -> Callable[[], SimulationClock]:
    def _make() -> SimulationClock:
        return SimulationClock(
            container,
            BatteryStateMachine(rng=random.Random(3)),
            sink,
            ticker,
            period=1.0,
            clock=fake_clock,
        )

    return _make
