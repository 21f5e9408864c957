# src/fruit_slicer/game/scheduler.py
#
# Timer facility for the game loop. Nothing runs on its own: the host loop
# feeds elapsed milliseconds into advance() and due callbacks run in the
# caller's thread, in due-time order.

from typing import Callable, List, Optional


class TimerHandle:
    def __init__(self, callback: Callable[[], None],
                 due: float, interval: Optional[float]):
        self.callback = callback
        self.due = due
        self.interval = interval
        self.cancelled = False

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    def __init__(self):
        self.now = 0.0
        self._timers: List[TimerHandle] = []

    def every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError(f"interval must be > 0, got {interval_ms}")
        handle = TimerHandle(callback, self.now + interval_ms, float(interval_ms))
        self._timers.append(handle)
        return handle

    def once(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(callback, self.now + max(0.0, delay_ms), None)
        self._timers.append(handle)
        return handle

    def pending(self) -> int:
        return sum(1 for h in self._timers if not h.cancelled)

    def advance(self, elapsed_ms: float) -> int:
        """
        Move the clock forward and run every callback that became due.
        Returns how many callbacks ran.
        """
        target = self.now + max(0.0, float(elapsed_ms))
        fired = 0

        while True:
            live = [h for h in self._timers if not h.cancelled and h.due <= target]
            if not live:
                break
            # earliest first; ties keep registration order
            handle = min(live, key=lambda h: h.due)
            self.now = handle.due

            if handle.repeating:
                handle.due += handle.interval
            else:
                handle.cancelled = True

            handle.callback()
            fired += 1

        self._timers = [h for h in self._timers if not h.cancelled]
        self.now = target
        return fired
