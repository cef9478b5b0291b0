import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from robobat.notifications.sink import NotificationLevel, NotificationSink
from robobat.simulation.clock import LoopTicker, ManualTicker, SimulationClock, TickHandle
from robobat.simulation.container import SimulationContainer
from robobat.simulation.models import BatteryStatus

MakeClock = Callable[[], SimulationClock]


def test_tick_updates_container_and_history(
    make_clock: MakeClock, container: SimulationContainer
) -> None:
    clock = make_clock()
    clock.tick()

    assert container.ticks == 1
    assert container.state.level == 99.5
    assert len(container.history) == 1
    assert container.history.latest is not None
    assert container.history.latest.level == 99.5
    assert container.history.latest.time == "12:00:00"


def test_sample_labels_follow_wall_clock(
    make_clock: MakeClock, container: SimulationContainer, ticker: ManualTicker, fake_clock: Any
) -> None:
    clock = make_clock()
    clock.tick()
    fake_clock.advance(1)
    clock.tick()

    assert [s.time for s in container.history] == ["12:00:00", "12:00:01"]


def test_history_length_is_min_of_ticks_and_capacity(
    make_clock: MakeClock, container: SimulationContainer, ticker: ManualTicker
) -> None:
    make_clock().start()

    for elapsed in range(1, 31):
        ticker.advance(1)
        assert container.ticks == elapsed
        assert len(container.history) == min(elapsed, 20)

    levels = [s.level for s in container.history]
    assert levels == [100 - t * 0.5 for t in range(11, 31)]


def test_events_forwarded_to_sink(
    make_clock: MakeClock, sink: NotificationSink, ticker: ManualTicker
) -> None:
    make_clock().start()
    ticker.advance(159)
    assert sink.history == []

    ticker.advance(1)
    assert [n.level for n in sink.history] == [NotificationLevel.WARNING]

    ticker.advance(100)
    assert [n.level for n in sink.history] == [NotificationLevel.WARNING, NotificationLevel.ERROR]


def test_stop_prevents_further_ticks(
    make_clock: MakeClock, container: SimulationContainer, ticker: ManualTicker
) -> None:
    clock = make_clock()
    calls = {"n": 0}
    original_tick = clock.tick

    def counting_tick():
        calls["n"] += 1
        return original_tick()

    clock.tick = counting_tick  # type: ignore[method-assign]
    clock.start()
    ticker.advance(3)
    clock.stop()
    state_after_stop = container.state

    fired = ticker.advance(60)

    assert calls["n"] == 3
    assert fired == 0
    assert ticker.pending == 0
    assert container.state is state_after_stop
    assert clock.running is False


def test_start_twice_keeps_single_schedule(make_clock: MakeClock, ticker: ManualTicker) -> None:
    clock = make_clock()
    first = clock.start()
    second = clock.start()

    assert first is second
    assert isinstance(first, TickHandle)
    assert ticker.pending == 1


def test_threshold_change_applies_on_next_tick(
    make_clock: MakeClock, container: SimulationContainer, sink: NotificationSink, ticker: ManualTicker
) -> None:
    clock = make_clock()
    clock.start()
    ticker.advance(10)  # level 95.0

    container.threshold = 94.5
    clock.restart()
    ticker.advance(1)

    assert container.state.level == 94.5
    assert [n.message for n in sink.history] == ["Warning! Charge below 94.5%!"]

    container.threshold = 99
    ticker.advance(1)
    assert container.state.status is BatteryStatus.LOW_BATTERY


def test_threshold_read_at_tick_time_without_restart(
    make_clock: MakeClock, container: SimulationContainer, ticker: ManualTicker
) -> None:
    make_clock().start()
    ticker.advance(1)
    assert container.state.status is BatteryStatus.ACTIVE

    container.threshold = 150
    ticker.advance(1)
    assert container.state.status is BatteryStatus.LOW_BATTERY


def test_restart_rearms_a_full_period(make_clock: MakeClock, container: SimulationContainer, ticker: ManualTicker) -> None:
    clock = make_clock()
    clock.start()
    ticker.advance(0.5)
    clock.restart()

    ticker.advance(0.5)
    assert container.ticks == 0
    ticker.advance(0.5)
    assert container.ticks == 1
    assert ticker.pending == 1


def test_manual_ticker_rejects_non_positive_period(ticker: ManualTicker) -> None:
    with pytest.raises(ValueError):
        ticker.call_every(0, lambda: None)


def test_manual_ticker_fires_in_time_order(ticker: ManualTicker) -> None:
    order: list[str] = []
    ticker.call_every(2, lambda: order.append("slow"))
    ticker.call_every(1, lambda: order.append("fast"))

    assert ticker.advance(4) == 6
    assert order == ["fast", "slow", "fast", "fast", "slow", "fast"]
    assert ticker.now == 4


def test_loop_ticker_stops_after_cancel() -> None:
    async def scenario() -> tuple[int, int]:
        count = {"n": 0}
        handle = LoopTicker().call_every(0.01, lambda: count.__setitem__("n", count["n"] + 1))
        await asyncio.sleep(0.1)
        handle.cancel()
        at_cancel = count["n"]
        await asyncio.sleep(0.05)
        assert handle.active is False
        return at_cancel, count["n"]

    at_cancel, final = asyncio.run(scenario())
    assert at_cancel >= 1
    assert final == at_cancel


def test_loop_ticker_callback_may_cancel_itself() -> None:
    async def scenario() -> int:
        fired = {"n": 0}
        handles: list[TickHandle] = []

        def once() -> None:
            fired["n"] += 1
            handles[0].cancel()

        handles.append(LoopTicker().call_every(0.01, once))
        await asyncio.sleep(0.08)
        return fired["n"]

    assert asyncio.run(scenario()) == 1
