"""Styles: characters, colours, options and visibility used when rendering."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from prettyprogress.indicator import (
    IndeterminateIndicatorGenerator,
    indeterminate_indicator_moving_back_and_forth,
)
from prettyprogress.textutil import Color, Colors
from prettyprogress.units import UnitsFormatter, format_number

_INDICATOR_TICK = timedelta(milliseconds=125)


class Position(enum.IntEnum):
    """Placement of one component relative to another."""

    LEFT = 0
    RIGHT = 1


def _indicator(text: str):
    return lambda: indeterminate_indicator_moving_back_and_forth(text, _INDICATOR_TICK)


@dataclass
class StyleChars:
    """Characters used to draw the tracker bar."""

    box_left: str = "["
    box_right: str = "]"
    finished: str = "#"
    finished25: str = "."
    finished50: str = "."
    finished75: str = "."
    indeterminate: IndeterminateIndicatorGenerator = field(
        default_factory=_indicator("<#>")
    )
    unfinished: str = "."


@dataclass
class StyleColors:
    """Colours for the parts of a rendered tracker."""

    message: Colors = field(default_factory=Colors)
    error: Colors = field(default_factory=Colors)
    percent: Colors = field(default_factory=Colors)
    pinned: Colors = field(default_factory=Colors)
    stats: Colors = field(default_factory=Colors)
    time: Colors = field(default_factory=Colors)
    tracker: Colors = field(default_factory=Colors)
    value: Colors = field(default_factory=Colors)
    speed: Colors = field(default_factory=Colors)


@dataclass
class StyleOptions:
    """Strings, formats and precisions used when rendering."""

    done_string: str = "done!"
    error_string: str = "fail!"
    eta_precision: timedelta = timedelta(seconds=1)
    eta_string: str = "~ETA"
    separator: str = " ... "
    snip_indicator: str = "~"
    percent_format: str = "%5.2f%%"
    percent_indeterminate: str = " ??? "
    speed_position: Position = Position.RIGHT
    speed_precision: timedelta = timedelta(microseconds=1)
    speed_overall_formatter: Optional[UnitsFormatter] = format_number
    speed_suffix: str = "/s"
    time_done_precision: timedelta = timedelta(milliseconds=1)
    time_in_progress_precision: timedelta = timedelta(microseconds=1)
    time_overall_precision: timedelta = timedelta(seconds=1)


@dataclass
class StyleVisibility:
    """Which components of a tracker are shown."""

    eta: bool = False
    eta_overall: bool = True
    percentage: bool = True
    pinned: bool = True
    speed: bool = False
    speed_overall: bool = False
    time: bool = True
    tracker: bool = True
    tracker_overall: bool = False
    value: bool = True


@dataclass
class Style:
    """Everything that decides how trackers are rendered."""

    name: str = "StyleDefault"
    chars: StyleChars = field(default_factory=StyleChars)
    colors: StyleColors = field(default_factory=StyleColors)
    options: StyleOptions = field(default_factory=StyleOptions)
    visibility: StyleVisibility = field(default_factory=StyleVisibility)

    def copy(self) -> "Style":
        """Return a copy whose parts can be changed independently."""
        return Style(
            name=self.name,
            chars=dataclasses.replace(self.chars),
            colors=dataclasses.replace(self.colors),
            options=dataclasses.replace(self.options),
            visibility=dataclasses.replace(self.visibility),
        )


STYLE_CHARS_DEFAULT = StyleChars()

STYLE_CHARS_BLOCKS = StyleChars(
    box_left="║",
    box_right="║",
    finished="█",
    finished25="░",
    finished50="▒",
    finished75="▓",
    indeterminate=_indicator("▒█▒")(),
    unfinished="░",
)

STYLE_CHARS_CIRCLE = StyleChars(
    box_left="(",
    box_right=")",
    finished="●",
    finished25="○",
    finished50="○",
    finished75="○",
    indeterminate=_indicator("○●○")(),
    unfinished="◌",
)

STYLE_CHARS_RHOMBUS = StyleChars(
    box_left="<",
    box_right=">",
    finished="◆",
    finished25="◈",
    finished50="◈",
    finished75="◈",
    indeterminate=_indicator("◈◆◈")(),
    unfinished="◇",
)

STYLE_COLORS_DEFAULT = StyleColors()

STYLE_COLORS_EXAMPLE = StyleColors(
    message=Colors(Color.FG_WHITE),
    error=Colors(Color.FG_RED),
    percent=Colors(Color.FG_HI_RED),
    pinned=Colors(Color.BG_HI_BLACK, Color.FG_WHITE, Color.BOLD),
    stats=Colors(Color.FG_HI_BLACK),
    time=Colors(Color.FG_GREEN),
    tracker=Colors(Color.FG_YELLOW),
    value=Colors(Color.FG_CYAN),
    speed=Colors(Color.FG_MAGENTA),
)

STYLE_OPTIONS_DEFAULT = StyleOptions()

STYLE_VISIBILITY_DEFAULT = StyleVisibility()


def _style(name: str, chars: StyleChars) -> Style:
    return Style(
        name=name,
        chars=chars,
        colors=dataclasses.replace(STYLE_COLORS_DEFAULT),
        options=dataclasses.replace(STYLE_OPTIONS_DEFAULT),
        visibility=dataclasses.replace(STYLE_VISIBILITY_DEFAULT),
    )


STYLE_DEFAULT = _style("StyleDefault", STYLE_CHARS_DEFAULT)
STYLE_BLOCKS = _style("StyleBlocks", STYLE_CHARS_BLOCKS)
STYLE_CIRCLE = _style("StyleCircle", STYLE_CHARS_CIRCLE)
STYLE_RHOMBUS = _style("StyleRhombus", STYLE_CHARS_RHOMBUS)