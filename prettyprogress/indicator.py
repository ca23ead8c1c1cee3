"""Indicators shown on a tracker whose total is not known."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional, Tuple

from prettyprogress.textutil import rune_width_without_esc


@dataclass(frozen=True)
class IndeterminateIndicator:
    """Text to draw on an indeterminate bar and where to put it."""

    position: int
    text: str


IndeterminateIndicatorGenerator = Callable[[int], IndeterminateIndicator]

_PAC_MAN_RIGHT = "ᗧ"
_PAC_MAN_LEFT = "ᗤ"


class _Bouncer:
    """Walks a position from the left edge to the right edge and back."""

    def __init__(self, width: int) -> None:
        self._width = width
        self._position = 0
        self._direction = 1

    def step(self, max_len: int) -> Tuple[int, int]:
        """Return the current position and the direction that led to it."""
        position, arriving = self._position, self._direction
        if position == 0:
            self._direction = 1
        elif position + self._width == max_len:
            self._direction = -1
        self._position += self._direction
        return position, arriving


def _dominoes() -> IndeterminateIndicatorGenerator:
    bouncer = _Bouncer(0)

    def generate(max_len: int) -> IndeterminateIndicator:
        position, _ = bouncer.step(max_len)
        return IndeterminateIndicator(0, "/" * position + "\\" * (max_len - position))

    return generate


def _moving_back_and_forth(indicator: str) -> IndeterminateIndicatorGenerator:
    bouncer = _Bouncer(rune_width_without_esc(indicator))

    def generate(max_len: int) -> IndeterminateIndicator:
        return IndeterminateIndicator(bouncer.step(max_len)[0], indicator)

    return generate


def _pac_man() -> IndeterminateIndicatorGenerator:
    bouncer = _Bouncer(rune_width_without_esc(_PAC_MAN_RIGHT))

    def generate(max_len: int) -> IndeterminateIndicator:
        position, arriving = bouncer.step(max_len)
        glyph = _PAC_MAN_RIGHT if arriving > 0 else _PAC_MAN_LEFT
        return IndeterminateIndicator(
            0, " " * position + glyph + " " * (max_len - position - 1)
        )

    return generate


def _moving_left_to_right(indicator: str) -> IndeterminateIndicatorGenerator:
    width = rune_width_without_esc(indicator)
    next_position = 0

    def generate(max_len: int) -> IndeterminateIndicator:
        nonlocal next_position
        current = next_position
        next_position += 1
        if next_position + width > max_len:
            next_position = 0
        return IndeterminateIndicator(current, indicator)

    return generate


def _moving_right_to_left(indicator: str) -> IndeterminateIndicatorGenerator:
    width = rune_width_without_esc(indicator)
    next_position = -1

    def generate(max_len: int) -> IndeterminateIndicator:
        nonlocal next_position
        if next_position == -1:
            next_position = max_len - width
        current = next_position
        next_position -= 1
        return IndeterminateIndicator(current, indicator)

    return generate


def _timed(
    generator: IndeterminateIndicatorGenerator, duration: timedelta
) -> IndeterminateIndicatorGenerator:
    """Advance ``generator`` at most once per ``duration``; zero means every call."""
    interval = duration.total_seconds()
    last: Optional[IndeterminateIndicator] = None
    last_time = time.monotonic()

    def generate(max_len: int) -> IndeterminateIndicator:
        nonlocal last, last_time
        now = time.monotonic()
        if last is None or interval == 0 or now - last_time > interval:
            last = generator(max_len)
            last_time = now
        return last

    return generate


def indeterminate_indicator_dominoes(
    duration: timedelta,
) -> IndeterminateIndicatorGenerator:
    """Dominoes falling back and forth across the bar."""
    return _timed(_dominoes(), duration)


def indeterminate_indicator_moving_back_and_forth(
    indicator: str, duration: timedelta
) -> IndeterminateIndicatorGenerator:
    """Move the indicator left to right and back, one step per tick."""
    return _timed(_moving_back_and_forth(indicator), duration)


def indeterminate_indicator_moving_left_to_right(
    indicator: str, duration: timedelta
) -> IndeterminateIndicatorGenerator:
    """Move the indicator left to right, restarting from the left."""
    return _timed(_moving_left_to_right(indicator), duration)


def indeterminate_indicator_moving_right_to_left(
    indicator: str, duration: timedelta
) -> IndeterminateIndicatorGenerator:
    """Move the indicator right to left, restarting from the right."""
    return _timed(_moving_right_to_left(indicator), duration)


def indeterminate_indicator_pac_man(
    duration: timedelta,
) -> IndeterminateIndicatorGenerator:
    """A Pac-Man chomping through the bar back and forth."""
    return _timed(_pac_man(), duration)