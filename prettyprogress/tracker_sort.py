"""Ordering of trackers before they are rendered."""

from __future__ import annotations

import enum
import math
from typing import Callable

from prettyprogress.tracker import Tracker


def _start_key(tracker: Tracker) -> float:
    start = tracker._time_start
    return -math.inf if start is None else float(start)


def _by_message(tracker: Tracker) -> tuple:
    return (tracker.message,)


def _by_percent(tracker: Tracker) -> tuple:
    return (tracker.percent_done(), _start_key(tracker))


def _by_value(tracker: Tracker) -> tuple:
    return (tracker.value(), _start_key(tracker))


class SortBy(enum.IntEnum):
    """How to order a list of trackers."""

    NONE = 0
    MESSAGE = 1
    MESSAGE_DSC = 2
    PERCENT = 3
    PERCENT_DSC = 4
    VALUE = 5
    VALUE_DSC = 6

    def sort(self, trackers: list[Tracker]) -> None:
        """Sort the list of trackers in place."""
        spec = _SORT_SPECS.get(self)
        if spec is None:
            return
        key, reverse = spec
        trackers.sort(key=key, reverse=reverse)


_SORT_SPECS: dict[SortBy, tuple[Callable[[Tracker], tuple], bool]] = {
    SortBy.MESSAGE: (_by_message, False),
    SortBy.MESSAGE_DSC: (_by_message, True),
    SortBy.PERCENT: (_by_percent, False),
    SortBy.PERCENT_DSC: (_by_percent, True),
    SortBy.VALUE: (_by_value, False),
    SortBy.VALUE_DSC: (_by_value, True),
}