# prettyprogress

Track the progress of one or more tasks and render them as live progress bars
in the terminal.

Each task is a `Tracker`. A `Progress` writer keeps a list of trackers and
redraws them at a fixed frequency until it is stopped, or, with auto-stop on,
until every tracker is done.

## Installation

```
pip install prettyprogress
```

## Quick start

```python
import threading
import time

from prettyprogress.progress import new_writer
from prettyprogress.style import Position
from prettyprogress.tracker import Tracker
from prettyprogress.units import UNITS_BYTES

pw = new_writer()
pw.set_auto_stop(True)
pw.set_tracker_length(25)
pw.set_tracker_position(Position.RIGHT)
pw.show_overall_tracker(True)

def download(name, size):
    tracker = Tracker(message=name, total=size, units=UNITS_BYTES)
    pw.append_tracker(tracker)
    while not tracker.is_done():
        time.sleep(0.1)
        tracker.increment(size // 10)

for idx in range(3):
    threading.Thread(target=download, args=(f"File #{idx}", 1_000_000)).start()

time.sleep(0.1)
pw.render()  # blocks until all trackers are done
```

A line for a tracker that is still running looks roughly like this (the
bar is 23 characters wide, the box characters make up the rest of the 25):

```
File #0 ... 40.00% [#########..............] [400.00KB in 401.27ms]
```

and once it has finished:

```
File #0 ... done! [1.00MB in 1.002s]
```

## Trackers

`prettyprogress.tracker.Tracker` holds a `message`, an expected `total`,
`units` and an optional `expected_duration` (a `timedelta`) used for the ETA.

- `increment(value)` and `set_value(value)` move the tracker forward; it is
  done once the value reaches a positive total.
- `increment_with_error(value)` and `mark_as_errored()` flag a failure; the
  tracker is then shown with `fail!`.
- `mark_as_done()` finishes a tracker, taking its current value as the total.
- A total of `0` makes the tracker indeterminate: an animated indicator is
  drawn instead of a filled bar, and the percentage shows ` ??? `. A negative
  total is replaced by the largest 64-bit integer when the tracker starts.
- `defer_start=True` keeps a tracker dormant after it is appended, until
  `start()`, `increment()`, `increment_with_error()` or `set_value()` is called.
- `eta()`, `percent_done()`, `value()`, `is_done()`, `is_errored()`,
  `is_started()` and `is_indeterminate()` report on its state.
- `update_message(msg)` and `update_total(total)` change it safely while it is
  being rendered, and `reset()` returns it to its initial state.

## Units

`prettyprogress.units` has `format_number` and `format_bytes`, which turn a
value into a short string such as `1.50K` or `1.50MB`. A `Units` object pairs
a formatter with a notation placed before or after the value
(`UnitsNotationPosition.BEFORE` or `AFTER`):

```python
from prettyprogress.units import Units

Units(notation="$").sprint(1500)  # "$1.50K"
```

Ready-made units are `UNITS_DEFAULT`, `UNITS_BYTES`, `UNITS_CURRENCY_DOLLAR`,
`UNITS_CURRENCY_EURO` and `UNITS_CURRENCY_POUND`.

## The writer

`new_writer()` in `prettyprogress.progress` returns a `Progress`:

- `append_tracker(tracker)` and `append_trackers(trackers)` add trackers,
  also while `render()` is running.
- `render()` draws until `stop()` is called (or until every tracker is done
  after `set_auto_stop(True)`); a second call while one is running returns at
  once. Run it in its own thread if the caller needs to keep working.
- `log(msg, *args)` prints a line above the active trackers at the next
  refresh; with arguments, `msg` is formatted with the `%` operator.
  `set_pinned_messages(*messages)` keeps lines pinned above the active
  trackers; calling it with no arguments clears them.
- `length()`, `length_active()`, `length_done()` and `length_in_queue()`
  count the trackers.
- `set_output_writer(writer)` sends the output to any object with a `write`
  method (flushed if it has `flush`) instead of standard output.
- `set_message_length` (or `set_message_width`) pads or snips messages,
  `set_tracker_length` sets the bar length (20 by default),
  `set_tracker_position` puts the bar left or right of the message,
  `set_terminal_width` fixes the width lines are cut to instead of polling the
  terminal, `set_update_frequency` takes a `timedelta` (250 ms by default),
  `set_num_trackers_expected` helps the overall tracker, and `set_sort_by`
  takes a `SortBy` from `prettyprogress.tracker_sort` to order trackers by
  message, percentage or value, ascending or descending.

## Styles

`style()` returns the writer's current `Style` (from `prettyprogress.style`),
which groups:

- `StyleChars`: the box, finished and unfinished characters and the
  indeterminate indicator;
- `StyleColors`: a `Colors` value (from `prettyprogress.textutil`) for each
  part of a line;
- `StyleOptions`: strings such as `done!`, `fail!` and `~ETA`, the percentage
  format (`"%5.2f%%"`), the speed position and formatter, and the precision of
  times and speeds;
- `StyleVisibility`: which parts are shown (percentage, bar, value, time,
  ETA, speed, pinned messages, the overall tracker).

Built-in styles are `STYLE_DEFAULT`, `STYLE_BLOCKS`, `STYLE_CIRCLE` and
`STYLE_RHOMBUS`; `STYLE_COLORS_EXAMPLE` shows a set of colours. `set_style`
stores a copy of the given style, and `Style.copy()` gives a copy whose parts
can be changed on their own. The `show_*` methods are shortcuts for the
matching visibility switches.

Indeterminate indicators are built with the `indeterminate_indicator_*`
functions in `prettyprogress.indicator`, for example
`indeterminate_indicator_pac_man(duration)` or
`indeterminate_indicator_moving_back_and_forth("<=>", duration)`; a
`duration` of zero advances the indicator on every draw.

`prettyprogress.render.TrackerFormatter` turns a single tracker into its line
of text and can be used on its own, without a `Progress`.

## What it does not do

This is a library only: there is no command-line program. It draws progress
bars and nothing else; it has no table or list rendering.

## Running the tests

```
pip install -e ".[test]"
pytest
```