import pytest

from prettyprogress.units import (
    UNITS_BYTES,
    UNITS_CURRENCY_DOLLAR,
    UNITS_CURRENCY_EURO,
    UNITS_CURRENCY_POUND,
    UNITS_DEFAULT,
    Units,
    UnitsNotationPosition,
    format_bytes,
    format_number,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, "1B"),
        (1500, "1.50KB"),
        (1500000, "1.50MB"),
        (1500000000, "1.50GB"),
        (1500000000000, "1.50TB"),
        (1500000000000000, "1.50PB"),
        (1500000000000000000, "1500.00PB"),
    ],
)
def test_format_bytes(value, expected):
    assert format_bytes(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, "1"),
        (1500, "1.50K"),
        (1500000, "1.50M"),
        (1500000000, "1.50B"),
        (1500000000000, "1.50T"),
        (1500000000000000, "1.50Q"),
        (1500000000000000000, "1500.00Q"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_units_sprint():
    assert UNITS_DEFAULT.sprint(1500) == "1.50K"
    assert UNITS_BYTES.sprint(1500) == "1.50KB"
    assert UNITS_CURRENCY_DOLLAR.sprint(1500) == "$1.50K"
    assert UNITS_CURRENCY_EURO.sprint(1500) == "₠1.50K"
    assert UNITS_CURRENCY_POUND.sprint(1500) == "£1.50K"

    custom = Units(notation="#")
    assert custom.sprint(1500) == "#1.50K"


def test_units_notation_position():
    after = Units(notation=" ₽", notation_position=UnitsNotationPosition.AFTER)
    assert after.sprint(1500) == "1.50K ₽"

    unknown = Units(notation="* ", notation_position=999)
    assert unknown.sprint(1500) == "* 1.50K"


def test_units_without_formatter_uses_number_format():
    assert Units().sprint(999) == "999"