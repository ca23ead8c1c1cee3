"""Turning trackers into the lines of text that get written to the screen."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Optional

from prettyprogress.style import Position, Style
from prettyprogress.textutil import pad, rune_width_without_esc, snip, trim
from prettyprogress.tracker import Tracker
from prettyprogress.units import format_number

DEFAULT_LENGTH_TRACKER = 20

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_S
_NS_PER_HOUR = 60 * _NS_PER_MIN


def _td_ns(td: timedelta) -> int:
    return (td // timedelta(microseconds=1)) * _NS_PER_US


def _round_ns(value: int, multiple: int) -> int:
    """Round to the nearest multiple, halves away from zero."""
    if multiple <= 0:
        return value
    sign = -1 if value < 0 else 1
    magnitude = abs(value)
    remainder = magnitude % multiple
    if remainder + remainder < multiple:
        return sign * (magnitude - remainder)
    return sign * (magnitude + multiple - remainder)


def _fraction(value: int, unit: int) -> str:
    digits = len(str(unit)) - 1
    frac = str(value % unit).rjust(digits, "0").rstrip("0")
    return f"{value // unit}" + (f".{frac}" if frac else "")


def _format_duration(ns: int) -> str:
    """Format nanoseconds the way durations are shown: 1.5ms, 2m3.25s, 0s."""
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    magnitude = abs(ns)
    if magnitude < _NS_PER_US:
        return f"{sign}{magnitude}ns"
    if magnitude < _NS_PER_MS:
        return f"{sign}{_fraction(magnitude, _NS_PER_US)}µs"
    if magnitude < _NS_PER_S:
        return f"{sign}{_fraction(magnitude, _NS_PER_MS)}ms"
    hours, rest = divmod(magnitude, _NS_PER_HOUR)
    minutes, rest = divmod(rest, _NS_PER_MIN)
    parts = [sign]
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{_fraction(rest, _NS_PER_S)}s")
    return "".join(parts)


@dataclass(frozen=True)
class RenderHint:
    """Hints that change how a single tracker line is drawn."""

    hide_time: bool = False
    hide_value: bool = False
    is_overall_tracker: bool = False


@dataclass
class TrackerFormatter:
    """Renders trackers as text according to a Style and a few lengths."""

    style: Style
    message_length: int = 0
    tracker_length: int = DEFAULT_LENGTH_TRACKER
    tracker_position: Position = Position.LEFT
    terminal_width: int = 0

    @property
    def length_progress(self) -> int:
        """Width of the bar between the box characters."""
        chars = self.style.chars
        return (
            self.tracker_length
            - rune_width_without_esc(chars.box_left)
            - rune_width_without_esc(chars.box_right)
        )

    @property
    def length_progress_overall(self) -> int:
        """Width of the bar drawn for the overall tracker."""
        options = self.style.options
        length = (
            self.message_length
            + rune_width_without_esc(options.separator)
            + self.length_progress
            + 1
        )
        if self.style.visibility.percentage:
            length += rune_width_without_esc(options.percent_format % 0.0)
        return length

    def generate_tracker_str(
        self, tracker: Tracker, max_len: int, hint: RenderHint
    ) -> str:
        """Draw the bar of the tracker, ``max_len`` columns wide plus the box."""
        value, total = tracker._value_and_total()
        if (
            not hint.is_overall_tracker
            and tracker.is_started()
            and (total == 0 or value > total)
        ):
            return self._tracker_str_indeterminate(max_len)
        return self._tracker_str_determinate(value, total, max_len)

    def _tracker_str_determinate(self, value: int, total: int, max_len: int) -> str:
        chars = self.style.chars
        finished_dots = 0.0
        dots_fraction = 0.0
        if max_len > 0:
            dot_value = total / max_len
            if dot_value > 0:
                finished_dots = value / dot_value
                dots_fraction = finished_dots - int(finished_dots)
        finished_len = math.floor(finished_dots)

        finished = chars.finished * finished_len if finished_len > 0 else ""
        if dots_fraction >= 0.75:
            in_progress = chars.finished75
        elif dots_fraction >= 0.50:
            in_progress = chars.finished50
        elif dots_fraction >= 0.25:
            in_progress = chars.finished25
        elif dots_fraction == 0:
            in_progress = ""
        else:
            in_progress = chars.unfinished
        drawn = rune_width_without_esc(finished + in_progress)
        unfinished = chars.unfinished * (max_len - drawn) if drawn < max_len else ""

        return self.style.colors.tracker.sprint(
            chars.box_left + finished + in_progress + unfinished + chars.box_right
        )

    def _tracker_str_indeterminate(self, max_len: int) -> str:
        chars = self.style.chars
        indicator = chars.indeterminate(max_len)
        bar = chars.unfinished * indicator.position if indicator.position > 0 else ""
        bar += indicator.text
        width = rune_width_without_esc(bar)
        if width < max_len:
            bar += chars.unfinished * (max_len - width)
        return self.style.colors.tracker.sprint(chars.box_left + bar + chars.box_right)

    def render_tracker(
        self,
        tracker: Tracker,
        hint: RenderHint,
        active_trackers: Iterable[Tracker] = (),
    ) -> str:
        """Return the tracker's line, ending in a newline.

        ``active_trackers`` is used to compute the overall speed.
        """
        message = tracker.message.replace("\t", "    ").replace("\r", "")
        if self.message_length > 0:
            if rune_width_without_esc(message) < self.message_length:
                message = pad(message, self.message_length, " ")
            else:
                message = snip(
                    message, self.message_length, self.style.options.snip_indicator
                )

        visibility = self.style.visibility
        parts: list[str] = []
        if hint.is_overall_tracker:
            if not tracker.is_done():
                overall = RenderHint(hide_value=True, is_overall_tracker=True)
                bar = self.generate_tracker_str(
                    tracker, self.length_progress_overall, overall
                )
                self._render_progress(
                    parts, tracker, message, bar, overall, active_trackers
                )
        elif tracker.is_done():
            self._render_done(parts, tracker, message)
        else:
            single = RenderHint(
                hide_time=not visibility.time, hide_value=not visibility.value
            )
            bar = self.generate_tracker_str(tracker, self.length_progress, single)
            self._render_progress(parts, tracker, message, bar, single, active_trackers)

        line = "".join(parts)
        if self.terminal_width > 0:
            line = trim(line, self.terminal_width)
        return line + "\n"

    def render_pinned_messages(self, messages: Iterable[str]) -> tuple[str, int]:
        """Return the pinned messages as text and the number of lines they take."""
        lines: list[str] = []
        num_lines = 0
        for msg in messages:
            msg = self.style.colors.pinned.sprint(msg.strip())
            if self.terminal_width > 0:
                msg = trim(msg, self.terminal_width)
            lines.append(msg + "\n")
            num_lines += 1 + msg.count("\n")
        return "".join(lines), num_lines

    def _render_done(self, out: list[str], tracker: Tracker, message: str) -> None:
        colors = self.style.colors
        options = self.style.options
        out.append(colors.message.sprint(message))
        out.append(colors.message.sprint(options.separator))
        if tracker.is_errored():
            out.append(colors.error.sprint(options.error_string))
        else:
            out.append(colors.message.sprint(options.done_string))
        visibility = self.style.visibility
        hint = RenderHint(hide_time=not visibility.time, hide_value=not visibility.value)
        self._render_stats(out, tracker, hint, ())

    def _render_message(self, out: list[str], tracker: Tracker, message: str) -> None:
        colors = self.style.colors
        if tracker.is_errored():
            out.append(colors.error.sprint(message))
        else:
            out.append(colors.message.sprint(message))

    def _render_percentage(self, out: list[str], tracker: Tracker) -> None:
        if not self.style.visibility.percentage:
            return
        options = self.style.options
        if tracker.is_indeterminate():
            text = options.percent_indeterminate
        else:
            text = options.percent_format % tracker.percent_done()
        out.append(self.style.colors.percent.sprint(text))

    def _render_progress(
        self,
        out: list[str],
        tracker: Tracker,
        message: str,
        bar: str,
        hint: RenderHint,
        active_trackers: Iterable[Tracker],
    ) -> None:
        colors = self.style.colors
        separator = colors.message.sprint(self.style.options.separator)
        show_bar = self.style.visibility.tracker
        if hint.is_overall_tracker:
            out.append(colors.tracker.sprint(bar))
            self._render_stats(out, tracker, hint, active_trackers)
        elif self.tracker_position == Position.RIGHT:
            self._render_message(out, tracker, message)
            out.append(separator)
            self._render_percentage(out, tracker)
            if show_bar:
                out.append(colors.tracker.sprint(" " + bar))
            self._render_stats(out, tracker, hint, active_trackers)
        else:
            self._render_percentage(out, tracker)
            if show_bar:
                out.append(colors.tracker.sprint(" " + bar))
            self._render_stats(out, tracker, hint, active_trackers)
            out.append(separator)
            self._render_message(out, tracker, message)

    def _render_stats(
        self,
        out: list[str],
        tracker: Tracker,
        hint: RenderHint,
        active_trackers: Iterable[Tracker],
    ) -> None:
        if hint.hide_value and hint.hide_time:
            return
        speed_position = self.style.options.speed_position
        stats = [" ["]
        if speed_position == Position.LEFT:
            self._render_speed(stats, tracker, hint, active_trackers)
        if not hint.hide_value:
            stats.append(
                self.style.colors.value.sprint(tracker.units.sprint(tracker.value()))
            )
        if not hint.hide_value and not hint.hide_time:
            stats.append(" in ")
        if not hint.hide_time:
            self._render_time(stats, tracker, hint)
        if speed_position == Position.RIGHT:
            self._render_speed(stats, tracker, hint, active_trackers)
        stats.append("]")
        out.append(self.style.colors.stats.sprint("".join(stats)))

    def _render_speed(
        self,
        out: list[str],
        tracker: Tracker,
        hint: RenderHint,
        active_trackers: Iterable[Tracker],
    ) -> None:
        visibility = self.style.visibility
        if hint.is_overall_tracker and not visibility.speed_overall:
            return
        if not hint.is_overall_tracker and not visibility.speed:
            return

        precision = _td_ns(self.style.options.speed_precision)
        if hint.is_overall_tracker:
            speed = 0.0
            for active in active_trackers:
                start = active._time_start
                if start is None:
                    continue
                taken = _round_ns(time.perf_counter_ns() - start, precision)
                if taken > 0:
                    speed += active.value() / (taken / _NS_PER_S)
            if speed > 0:
                formatter = self.style.options.speed_overall_formatter or format_number
                self._render_speed_text(out, formatter(int(speed)))
        elif tracker._time_start is not None:
            taken = _round_ns(time.perf_counter_ns() - tracker._time_start, precision)
            if taken > precision:
                per_second = int(tracker.value() / (taken / _NS_PER_S))
                self._render_speed_text(out, tracker.units.sprint(per_second))

    def _render_speed_text(self, out: list[str], speed: str) -> None:
        options = self.style.options
        if options.speed_position == Position.RIGHT:
            out.append("; ")
        out.append(self.style.colors.speed.sprint(speed))
        out.append(options.speed_suffix)
        if options.speed_position == Position.LEFT:
            out.append("; ")

    def _render_time(self, out: list[str], tracker: Tracker, hint: RenderHint) -> None:
        options = self.style.options
        elapsed = _td_ns(tracker._elapsed())
        if hint.is_overall_tracker:
            precision = options.time_overall_precision
        elif tracker.is_done():
            precision = options.time_done_precision
        else:
            precision = options.time_in_progress_precision
        out.append(
            self.style.colors.time.sprint(
                _format_duration(_round_ns(elapsed, _td_ns(precision)))
            )
        )
        self._render_eta(out, tracker, hint)

    def _render_eta(self, out: list[str], tracker: Tracker, hint: RenderHint) -> None:
        visibility = self.style.visibility
        if hint.is_overall_tracker and not visibility.eta_overall:
            return
        if not hint.is_overall_tracker and not visibility.eta:
            return
        options = self.style.options
        precision = _td_ns(options.eta_precision)
        eta = _round_ns(_td_ns(tracker.eta()), precision)
        if hint.is_overall_tracker or eta > precision:
            out.append("; ")
            out.append(options.eta_string)
            out.append(": ")
            out.append(self.style.colors.time.sprint(_format_duration(eta)))


def _optional_width(width: Optional[int]) -> int:
    return width if width and width > 0 else 0