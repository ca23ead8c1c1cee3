"""Text helpers: ANSI colours, printable widths, trimming, padding, snipping."""

from __future__ import annotations

import enum
import re
from typing import Iterator

from wcwidth import wcwidth

ESCAPE_START = "\x1b["
ESCAPE_RESET = "\x1b[0m"
CURSOR_UP = "\x1b[A"
ERASE_LINE = "\x1b[K"

_ESC_RE = re.compile(
    r"\x1b\[[0-9;?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
)


class Color(enum.IntEnum):
    """SGR attributes usable in a Colors sequence."""

    RESET = 0
    BOLD = 1
    FAINT = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK_SLOW = 5
    BLINK_RAPID = 6
    REVERSE_VIDEO = 7
    CONCEALED = 8
    CROSSED_OUT = 9

    FG_BLACK = 30
    FG_RED = 31
    FG_GREEN = 32
    FG_YELLOW = 33
    FG_BLUE = 34
    FG_MAGENTA = 35
    FG_CYAN = 36
    FG_WHITE = 37

    BG_BLACK = 40
    BG_RED = 41
    BG_GREEN = 42
    BG_YELLOW = 43
    BG_BLUE = 44
    BG_MAGENTA = 45
    BG_CYAN = 46
    BG_WHITE = 47

    FG_HI_BLACK = 90
    FG_HI_RED = 91
    FG_HI_GREEN = 92
    FG_HI_YELLOW = 93
    FG_HI_BLUE = 94
    FG_HI_MAGENTA = 95
    FG_HI_CYAN = 96
    FG_HI_WHITE = 97

    BG_HI_BLACK = 100
    BG_HI_RED = 101
    BG_HI_GREEN = 102
    BG_HI_YELLOW = 103
    BG_HI_BLUE = 104
    BG_HI_MAGENTA = 105
    BG_HI_CYAN = 106
    BG_HI_WHITE = 107


class Colors(tuple):
    """An ordered set of SGR attributes applied together to a piece of text."""

    def __new__(cls, *colors: int) -> "Colors":
        return super().__new__(cls, tuple(Color(c) for c in colors))

    @property
    def escape_seq(self) -> str:
        """The escape sequence that switches these attributes on."""
        if not self:
            return ""
        return ESCAPE_START + ";".join(str(int(c)) for c in self) + "m"

    def sprint(self, value: object) -> str:
        """Return ``value`` as text wrapped in this colour sequence."""
        text = str(value)
        seq = self.escape_seq
        if not seq:
            return text
        body = text.replace(ESCAPE_RESET, ESCAPE_RESET + seq)
        return seq + body + ESCAPE_RESET


def _char_width(ch: str) -> int:
    return max(wcwidth(ch), 0)


def _tokens(text: str) -> Iterator[tuple[bool, str]]:
    """Split text into (is_escape_sequence, piece) chunks."""
    pos = 0
    for match in _ESC_RE.finditer(text):
        if match.start() > pos:
            yield False, text[pos : match.start()]
        yield True, match.group()
        pos = match.end()
    if pos < len(text):
        yield False, text[pos:]


def strip_escape_sequences(text: str) -> str:
    """Remove every ANSI escape sequence from the text."""
    return _ESC_RE.sub("", text)


def rune_width_without_esc(text: str) -> int:
    """Printable width of the text, ignoring ANSI escape sequences."""
    return sum(_char_width(ch) for ch in strip_escape_sequences(text))


def trim(text: str, max_len: int) -> str:
    """Cut the text to ``max_len`` printable columns, keeping escape sequences."""
    if max_len <= 0:
        return ""
    out: list[str] = []
    width = 0
    full = False
    for is_escape, piece in _tokens(text):
        if is_escape:
            out.append(piece)
            continue
        if full:
            continue
        for ch in piece:
            w = _char_width(ch)
            if width + w > max_len:
                full = True
                break
            out.append(ch)
            width += w
    return "".join(out)


def pad(text: str, length: int, char: str) -> str:
    """Pad the text on the right with ``char`` up to ``length`` columns."""
    missing = length - rune_width_without_esc(text)
    if missing > 0:
        return text + char * missing
    return text


def snip(text: str, length: int, indicator: str) -> str:
    """Shorten the text to ``length`` columns, ending it with ``indicator``."""
    if length > 0 and rune_width_without_esc(text) > length:
        keep = length - rune_width_without_esc(indicator)
        return trim(text, keep) + indicator
    return text