import pytest

from prettyprogress.tracker import Tracker
from prettyprogress.tracker_sort import SortBy


def _name(number):
    return f"Downloading File # {number}"


def _unstarted(number, value):
    tracker = Tracker(message=_name(number), total=1000)
    tracker._value = value
    return tracker


def _make_trackers():
    started = Tracker(message=_name(4), total=1000)
    started.set_value(300)
    return [_unstarted(2, 300), _unstarted(1, 100), _unstarted(3, 500), started]


_SORT_SEQUENCE = [
    (SortBy.NONE, [2, 1, 3, 4]),
    (SortBy.MESSAGE, [1, 2, 3, 4]),
    (SortBy.MESSAGE_DSC, [4, 3, 2, 1]),
    (SortBy.PERCENT, [1, 2, 4, 3]),
    (SortBy.PERCENT_DSC, [3, 4, 2, 1]),
    (SortBy.VALUE, [1, 2, 4, 3]),
    (SortBy.VALUE_DSC, [3, 4, 2, 1]),
]


def test_sort_by_sequence():
    trackers = _make_trackers()
    for sort_by, numbers in _SORT_SEQUENCE:
        sort_by.sort(trackers)
        assert [t.message for t in trackers] == [_name(n) for n in numbers], sort_by


@pytest.mark.parametrize(
    "sort_by, expected",
    [(SortBy.NONE, ["c", "a", "b"]), (SortBy.MESSAGE, ["a", "b", "c"])],
)
def test_sort_in_place(sort_by, expected):
    trackers = [Tracker(message=m) for m in ("c", "a", "b")]
    original = trackers
    sort_by.sort(trackers)
    assert trackers is original
    assert [t.message for t in trackers] == expected