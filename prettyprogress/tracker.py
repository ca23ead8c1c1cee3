"""Tracker: the progress of a single task."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from prettyprogress.units import UNITS_DEFAULT, Units

MAX_INT64 = 2**63 - 1

_NS_PER_US = 1000


def _td_to_ns(td: timedelta) -> int:
    return (td // timedelta(microseconds=1)) * _NS_PER_US


def _ns_to_td(ns: int) -> timedelta:
    return timedelta(microseconds=_trunc_div(ns, _NS_PER_US))


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


@dataclass(eq=False)
class Tracker:
    """Tracks the progress of one task towards an expected total.

    Update ``message`` through ``update_message`` and ``total`` through
    ``update_total`` once the tracker is in use.
    """

    message: str = ""
    total: int = 0
    units: Units = UNITS_DEFAULT
    defer_start: bool = False
    expected_duration: timedelta = timedelta(0)

    _done: bool = field(default=False, init=False, repr=False)
    _err: bool = field(default=False, init=False, repr=False)
    _time_start: Optional[int] = field(default=None, init=False, repr=False)
    _time_stop: Optional[int] = field(default=None, init=False, repr=False)
    _value: int = field(default=0, init=False, repr=False)
    _min_eta: timedelta = field(default=timedelta(0), init=False, repr=False)
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False
    )

    def eta(self) -> timedelta:
        """Estimated time remaining until the tracker completes."""
        with self._lock:
            if self._time_start is None:
                return timedelta(0)
            time_taken = time.perf_counter_ns() - self._time_start
            expected = _td_to_ns(self.expected_duration)
            if expected > 0 and expected > time_taken:
                return _ns_to_td(expected - time_taken)
            p_done = int(self._percent_done())
            if p_done == 0:
                return timedelta(0)
            eta = _ns_to_td(_trunc_div(time_taken, p_done) * (100 - p_done))
            return max(eta, self._min_eta)

    def increment(self, value: int) -> None:
        """Add ``value`` to the current value."""
        with self._lock:
            self._increment(value)

    def increment_with_error(self, value: int) -> None:
        """Add ``value`` to the current value and flag an error."""
        with self._lock:
            self._increment(value)
            self._err = True

    def is_started(self) -> bool:
        """Whether the tracker has started."""
        with self._lock:
            return self._time_start is not None

    def is_done(self) -> bool:
        """Whether the tracker has reached its final state."""
        with self._lock:
            return self._done

    def is_errored(self) -> bool:
        """Whether an error was recorded."""
        with self._lock:
            return self._err

    def is_indeterminate(self) -> bool:
        """Whether the total is unknown."""
        with self._lock:
            return self.total == 0

    def mark_as_done(self) -> None:
        """Force completion, taking the current value as the total."""
        with self._lock:
            self.total = self._value
            self._stop()

    def mark_as_errored(self) -> None:
        """Force completion with an error, unless already done."""
        with self._lock:
            if not self._done:
                self.total = self._value
                self._err = True
                self._stop()

    def percent_done(self) -> float:
        """Percentage of the total reached so far."""
        with self._lock:
            return self._percent_done()

    def reset(self) -> None:
        """Return the tracker to its initial state."""
        with self._lock:
            self._done = False
            self._err = False
            self._time_start = None
            self._time_stop = None
            self._value = 0

    def set_value(self, value: int) -> None:
        """Set the current value and re-evaluate completion."""
        with self._lock:
            self._done = False
            self._time_stop = None
            self._value = 0
            self._increment(value)

    def update_message(self, msg: str) -> None:
        """Replace the message."""
        with self._lock:
            self.message = msg

    def update_total(self, total: int) -> None:
        """Replace the expected total."""
        with self._lock:
            if total > self.total:
                self._done = False
            self.total = total

    def value(self) -> int:
        """The current value."""
        with self._lock:
            return self._value

    def start(self) -> None:
        """Start the tracker if it has not started yet."""
        if self._time_start is None:
            self._start()

    def _start(self) -> None:
        with self._lock:
            self._start_unlocked()

    def _start_unlocked(self) -> None:
        if self.total < 0:
            self.total = MAX_INT64
        self._done = False
        self._err = False
        self._time_start = time.perf_counter_ns()

    def _stop(self) -> None:
        self._done = True
        self._time_stop = time.perf_counter_ns()
        if self._value > self.total:
            self.total = self._value

    def _increment(self, value: int) -> None:
        if self._done:
            return
        if self._time_start is None:
            self._start_unlocked()
        self._value += value
        if self.total > 0 and self._value >= self.total:
            self._stop()

    def _percent_done(self) -> float:
        if self.total == 0:
            return 0.0
        return self._value * 100.0 / self.total

    def _value_and_total(self) -> tuple[int, int]:
        with self._lock:
            return self._value, self.total

    def _elapsed(self) -> timedelta:
        """Time spent so far, or in total once done."""
        with self._lock:
            if self._time_start is None:
                return timedelta(0)
            if self._done and self._time_stop is not None:
                end = self._time_stop
            else:
                end = time.perf_counter_ns()
            return _ns_to_td(end - self._time_start)