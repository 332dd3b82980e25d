from __future__ import annotations

from engine.core.frame_clock import FrameClock


class _Recorder:
    def __init__(self, log: list, name: str) -> None:
        self.log = log
        self.name = name

    def tick(self, dt: float) -> None:
        self.log.append((self.name, dt))


def test_tick_measures_dt_with_clock_and_keeps_order() -> None:
    times = iter([10.0, 10.5, 11.25])
    log: list = []
    clock = FrameClock([_Recorder(log, "a"), _Recorder(log, "b")], clock=lambda: next(times))
    clock.tick()
    clock.tick()
    assert log == [("a", 0.5), ("b", 0.5), ("a", 0.75), ("b", 0.75)]


def test_explicit_dt_is_passed_through() -> None:
    log: list = []
    clock = FrameClock([_Recorder(log, "a")], clock=lambda: 0.0)
    clock.tick(1 / 60)
    assert log == [("a", 1 / 60)]
