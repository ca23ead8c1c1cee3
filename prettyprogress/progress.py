"""Progress: tracks any number of tasks and renders them to a terminal."""

from __future__ import annotations

import os
import sys
import threading
from datetime import timedelta
from typing import Iterable, Optional, TextIO

from prettyprogress.render import DEFAULT_LENGTH_TRACKER, RenderHint, TrackerFormatter
from prettyprogress.style import STYLE_DEFAULT, Position, Style
from prettyprogress.textutil import CURSOR_UP, ERASE_LINE
from prettyprogress.tracker import Tracker
from prettyprogress.tracker_sort import SortBy
from prettyprogress.units import format_number

DEFAULT_UPDATE_FREQUENCY = timedelta(milliseconds=250)

_TERMINAL_POLL_SECONDS = 0.1


def _query_terminal_width() -> int:
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except (OSError, ValueError, AttributeError):
        return 0


class Progress:
    """Tracks the progress of one or more tasks and renders them periodically."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._auto_stop = False
        self._length_message = 0
        self._length_tracker = 0
        self._logs_to_render: list[str] = []
        self._num_trackers_expected = 0
        self._output_writer: Optional[TextIO] = None
        self._overall_tracker: Optional[Tracker] = None
        self._pinned_messages: list[str] = []
        self._pinned_num_lines = 0
        self._stop_event = threading.Event()
        self._render_in_progress = False
        self._sort_by = SortBy.NONE
        self._style: Optional[Style] = None
        self._terminal_width = 0
        self._terminal_width_override = 0
        self._tracker_position = Position.LEFT
        self._trackers_active: list[Tracker] = []
        self._trackers_done: list[Tracker] = []
        self._trackers_in_queue: list[Tracker] = []
        self._update_frequency = timedelta(0)

    # -- trackers -----------------------------------------------------------

    def append_tracker(self, tracker: Tracker) -> None:
        """Queue a tracker; it gets picked up in the next render cycle."""
        if not tracker.defer_start:
            tracker._start()
        with self._lock:
            if self._overall_tracker is None:
                overall = Tracker(total=1)
                if self._num_trackers_expected > 0:
                    overall.total = self._num_trackers_expected * 100
                overall._start()
                self._overall_tracker = overall
            self._trackers_in_queue.append(tracker)
            self._overall_tracker.update_total(self.length() * 100)

    def append_trackers(self, trackers: Iterable[Tracker]) -> None:
        """Queue several trackers."""
        for tracker in trackers:
            self.append_tracker(tracker)

    def is_render_in_progress(self) -> bool:
        """Whether a call to render() is running."""
        with self._lock:
            return self._render_in_progress

    def length(self) -> int:
        """Number of trackers tracked overall."""
        with self._lock:
            return (
                len(self._trackers_in_queue)
                + len(self._trackers_active)
                + len(self._trackers_done)
            )

    def length_active(self) -> int:
        """Number of trackers not done yet."""
        with self._lock:
            return len(self._trackers_in_queue) + len(self._trackers_active)

    def length_done(self) -> int:
        """Number of trackers that are done."""
        with self._lock:
            return len(self._trackers_done)

    def length_in_queue(self) -> int:
        """Number of trackers waiting to be picked up by the renderer."""
        with self._lock:
            return len(self._trackers_in_queue)

    def log(self, msg: str, *args: object) -> None:
        """Show a line above the active trackers on the next refresh."""
        if args:
            msg = msg % args
        with self._lock:
            self._logs_to_render.append(msg)

    # -- configuration ------------------------------------------------------

    def set_auto_stop(self, auto_stop: bool) -> None:
        """Stop rendering by itself once every tracker is done."""
        self._auto_stop = auto_stop

    def set_message_length(self, length: int) -> None:
        """Pad or snip tracker messages to this printed length."""
        self._length_message = length

    def set_message_width(self, width: int) -> None:
        """Same as set_message_length."""
        self._length_message = width

    def set_num_trackers_expected(self, num_trackers: int) -> None:
        """Expected number of trackers, used for the overall progress."""
        self._num_trackers_expected = num_trackers

    def set_output_writer(self, writer: TextIO) -> None:
        """Where the rendered text is written; defaults to standard output."""
        self._output_writer = writer

    def set_pinned_messages(self, *args: str) -> None:
        """Replace the messages pinned above the trackers; none clears them."""
        with self._lock:
            self._pinned_messages = list(args)

    def set_sort_by(self, sort_by: SortBy) -> None:
        """How trackers are ordered before they are rendered."""
        self._sort_by = sort_by

    def set_style(self, style: Style) -> None:
        """Use a copy of the given style for rendering."""
        self._style = style.copy()

    def set_terminal_width(self, width: int) -> None:
        """Use a fixed terminal width instead of polling for it."""
        self._terminal_width_override = width

    def set_tracker_length(self, length: int) -> None:
        """Printed length of every tracker bar, box characters included."""
        self._length_tracker = length

    def set_tracker_position(self, position: Position) -> None:
        """Where the bar goes relative to the message."""
        self._tracker_position = position

    def set_update_frequency(self, frequency: timedelta) -> None:
        """Interval between two refreshes of the screen."""
        self._update_frequency = frequency

    def show_eta(self, show: bool) -> None:
        """Toggle the ETA of each tracker."""
        self.style().visibility.eta = show

    def show_percentage(self, show: bool) -> None:
        """Toggle the percentage of each tracker."""
        self.style().visibility.percentage = show

    def show_overall_tracker(self, show: bool) -> None:
        """Toggle the overall tracker."""
        self.style().visibility.tracker_overall = show

    def show_time(self, show: bool) -> None:
        """Toggle the time taken by each tracker."""
        self.style().visibility.time = show

    def show_tracker(self, show: bool) -> None:
        """Toggle the bar of each tracker."""
        self.style().visibility.tracker = show

    def show_value(self, show: bool) -> None:
        """Toggle the value of each tracker."""
        self.style().visibility.value = show

    def style(self) -> Style:
        """The style in use, created from the default one when needed."""
        if self._style is None:
            self._style = STYLE_DEFAULT.copy()
        return self._style

    # -- rendering ----------------------------------------------------------

    def stop(self) -> None:
        """Stop a render() that is in progress."""
        with self._lock:
            if self._render_in_progress:
                self._stop_event.set()

    def render(self) -> None:
        """Render all trackers until stopped; returns at once if already rendering."""
        stop_event = self._begin_render()
        if stop_event is None:
            return
        try:
            self._init_for_render(stop_event)
            interval = self._update_frequency.total_seconds()
            last_length = 0
            while not stop_event.wait(interval):
                last_length = self._render_trackers(last_length, stop_event)
            self._render_trackers(last_length, stop_event)
        finally:
            self._end_render()

    def _begin_render(self) -> Optional[threading.Event]:
        with self._lock:
            if self._render_in_progress:
                return None
            self._stop_event = threading.Event()
            self._render_in_progress = True
            return self._stop_event

    def _end_render(self) -> None:
        with self._lock:
            self._render_in_progress = False

    def _init_for_render(self, stop_event: threading.Event) -> None:
        style = self.style()
        if style.options.speed_overall_formatter is None:
            style.options.speed_overall_formatter = format_number
        if self._length_tracker <= 0:
            self._length_tracker = DEFAULT_LENGTH_TRACKER
        if self._output_writer is None:
            self._output_writer = sys.stdout
        if self._update_frequency <= timedelta(0):
            self._update_frequency = DEFAULT_UPDATE_FREQUENCY
        threading.Thread(
            target=self._watch_terminal_size, args=(stop_event,), daemon=True
        ).start()

    def _watch_terminal_size(self, stop_event: threading.Event) -> None:
        self._update_terminal_size()
        while not stop_event.wait(_TERMINAL_POLL_SECONDS):
            self._update_terminal_size()

    def _update_terminal_size(self) -> None:
        width = _query_terminal_width()
        with self._lock:
            self._terminal_width = width

    def _get_terminal_width(self) -> int:
        with self._lock:
            if self._terminal_width_override > 0:
                return self._terminal_width_override
            return self._terminal_width

    def _formatter(self) -> TrackerFormatter:
        return TrackerFormatter(
            style=self.style(),
            message_length=self._length_message,
            tracker_length=self._length_tracker,
            tracker_position=self._tracker_position,
            terminal_width=self._get_terminal_width(),
        )

    def _render_trackers(self, last_length: int, stop_event: threading.Event) -> int:
        with self._lock:
            if self.length_active() == 0:
                return 0
            formatter = self._formatter()
            parts: list[str] = []
            if last_length > 0:
                parts.append(self._cursor_to_top())
            parts.append(self._render_done_and_active(formatter))
            if self.style().visibility.tracker_overall:
                parts.append(
                    formatter.render_tracker(
                        self._overall_tracker,
                        RenderHint(is_overall_tracker=True),
                        list(self._trackers_active),
                    )
                )
            text = "".join(parts)
            writer = self._output_writer
            writer.write(text)
            flush = getattr(writer, "flush", None)
            if flush is not None:
                flush()
            if self._auto_stop and self.length_active() == 0:
                stop_event.set()
            return len(text)

    def _cursor_to_top(self) -> str:
        lines = len(self._trackers_active)
        visibility = self.style().visibility
        overall = self._overall_tracker
        if visibility.tracker_overall and overall is not None and not overall.is_done():
            lines += 1
        if visibility.pinned:
            lines += self._pinned_num_lines
        return (CURSOR_UP + ERASE_LINE) * lines

    def _extract_done_and_active(self) -> tuple[list[Tracker], list[Tracker]]:
        if self._trackers_in_queue:
            self._trackers_active.extend(self._trackers_in_queue)
            self._trackers_in_queue = []

        active: list[Tracker] = []
        done: list[Tracker] = []
        active_progress = 0
        max_eta = timedelta(0)
        for tracker in self._trackers_active:
            if tracker.is_done():
                done.append(tracker)
            else:
                active.append(tracker)
                active_progress += int(tracker.percent_done())
                max_eta = max(max_eta, tracker.eta())
        self._sort_by.sort(done)
        self._sort_by.sort(active)

        overall = self._overall_tracker
        with overall._lock:
            overall._value = (len(self._trackers_done) + len(done)) * 100
            overall._value += active_progress
            overall._min_eta = max_eta
        if not active:
            overall.mark_as_done()
        return active, done

    def _render_done_and_active(self, formatter: TrackerFormatter) -> str:
        active, done = self._extract_done_and_active()
        parts = [formatter.render_tracker(t, RenderHint()) for t in done]
        self._trackers_done.extend(done)

        parts.extend(ERASE_LINE + log + "\n" for log in self._logs_to_render)
        self._logs_to_render = []

        if active and self.style().visibility.pinned:
            pinned, num_lines = formatter.render_pinned_messages(self._pinned_messages)
            parts.append(pinned)
            self._pinned_num_lines = num_lines

        parts.extend(formatter.render_tracker(t, RenderHint()) for t in active)
        self._trackers_active = active
        return "".join(parts)


def new_writer() -> Progress:
    """Create a Progress ready to be configured and rendered."""
    return Progress()