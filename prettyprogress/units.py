"""Units used to describe and format the value tracked by a Tracker."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional

UnitsFormatter = Callable[[int], str]

_UNIT_SCALES = (
    1_000_000_000_000_000,
    1_000_000_000_000,
    1_000_000_000,
    1_000_000,
    1_000,
)

_BYTE_NOTATIONS = {
    1_000_000_000_000_000: "PB",
    1_000_000_000_000: "TB",
    1_000_000_000: "GB",
    1_000_000: "MB",
    1_000: "KB",
    0: "B",
}

_NUMBER_NOTATIONS = {
    1_000_000_000_000_000: "Q",
    1_000_000_000_000: "T",
    1_000_000_000: "B",
    1_000_000: "M",
    1_000: "K",
    0: "",
}


class UnitsNotationPosition(enum.IntEnum):
    """Where the unit notation goes relative to the formatted value."""

    BEFORE = 0
    AFTER = 1


def _format_scaled(value: int, notations: dict[int, str]) -> str:
    for scale in _UNIT_SCALES:
        if value >= scale:
            return f"{value / scale:.2f}{notations[scale]}"
    return f"{value}{notations[0]}"


def format_bytes(value: int) -> str:
    """Format the value as a byte count (B, KB, MB, GB, TB, PB)."""
    return _format_scaled(value, _BYTE_NOTATIONS)


def format_number(value: int) -> str:
    """Format the value as a regular number (K, M, B, T, Q)."""
    return _format_scaled(value, _NUMBER_NOTATIONS)


@dataclass(frozen=True)
class Units:
    """Describes the kind of value being tracked and how to print it."""

    formatter: Optional[UnitsFormatter] = None
    notation: str = ""
    notation_position: int = UnitsNotationPosition.BEFORE

    def sprint(self, value: int) -> str:
        """Return the value formatted with this unit's notation."""
        formatter = self.formatter or format_number
        formatted = formatter(value)
        if self.notation_position == UnitsNotationPosition.AFTER:
            return formatted + self.notation
        return self.notation + formatted


UNITS_DEFAULT = Units(formatter=format_number)
UNITS_BYTES = Units(formatter=format_bytes)
UNITS_CURRENCY_DOLLAR = Units(formatter=format_number, notation="$")
UNITS_CURRENCY_EURO = Units(formatter=format_number, notation="₠")
UNITS_CURRENCY_POUND = Units(formatter=format_number, notation="£")