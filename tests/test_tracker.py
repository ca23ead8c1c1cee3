import time
from datetime import timedelta

import pytest

from prettyprogress.tracker import MAX_INT64, Tracker


def _finish_in_two_halves(tracker, delay):
    time.sleep(delay)
    tracker.increment(50)
    assert tracker.eta() > timedelta(0)
    tracker.increment(50)
    assert tracker.eta() == timedelta(0)


def test_eta_without_expected_duration():
    tracker = Tracker()
    assert tracker.eta() == timedelta(0)

    tracker.total = 100
    tracker._start()
    assert tracker.eta() == timedelta(0)
    _finish_in_two_halves(tracker, 0.025)


def test_eta_with_expected_duration():
    delay = 0.025
    tracker = Tracker(total=100, expected_duration=timedelta(seconds=delay))
    tracker._start()
    assert tracker.eta() <= tracker.expected_duration
    _finish_in_two_halves(tracker, delay)


def _progress(tracker):
    return tracker.value(), tracker.total, tracker.is_errored(), tracker.is_done()


@pytest.mark.parametrize(
    "method, errored",
    [("increment", False), ("increment_with_error", True)],
)
def test_increment(method, errored):
    tracker = Tracker(total=100)
    step = getattr(tracker, method)
    assert _progress(tracker) == (0, 100, False, False)

    step(10)
    assert _progress(tracker) == (10, 100, errored, False)

    step(100)
    assert _progress(tracker) == (110, 110, errored, True)
    assert tracker._time_stop is not None


@pytest.mark.parametrize(
    "action",
    [
        lambda t: t.start(),
        lambda t: t.increment(1),
        lambda t: t.increment_with_error(1),
        lambda t: t.set_value(1),
    ],
)
def test_is_started(action):
    tracker = Tracker(defer_start=True)
    assert not tracker.is_started()
    action(tracker)
    assert tracker.is_started()


def test_is_done():
    tracker = Tracker(total=10)
    assert not tracker.is_done()
    tracker.increment(10)
    assert tracker.is_done()


def test_is_indeterminate():
    tracker = Tracker(total=10)
    assert not tracker.is_indeterminate()
    tracker.total = 0
    assert tracker.is_indeterminate()


def _completion(tracker):
    return tracker.is_done(), tracker.is_errored(), tracker._time_stop is not None


@pytest.mark.parametrize(
    "first, second, errored",
    [
        ("mark_as_done", "mark_as_errored", False),
        ("mark_as_errored", "mark_as_done", True),
    ],
)
def test_mark_as(first, second, errored):
    tracker = Tracker()
    assert _completion(tracker) == (False, False, False)
    for name in (first, second):
        getattr(tracker, name)()
        assert _completion(tracker) == (True, errored, True)


def test_percent_done():
    tracker = Tracker()
    assert tracker.percent_done() == 0.0

    tracker.total = 100
    assert tracker.percent_done() == 0.0

    for idx in range(1, 101):
        tracker.increment(1)
        assert tracker.percent_done() == float(idx)


def _timing_state(tracker):
    return (
        tracker.is_done(),
        tracker._time_start is not None,
        tracker._time_stop is not None,
        tracker.value(),
    )


def test_reset():
    tracker = Tracker(total=100)
    assert _timing_state(tracker) == (False, False, False, 0)

    tracker._start()
    tracker.increment(tracker.total)
    assert _timing_state(tracker) == (True, True, True, 100)

    tracker.reset()
    assert _timing_state(tracker) == (False, False, False, 0)


def test_set_value():
    tracker = Tracker(total=100)
    assert (tracker.value(), tracker.is_done()) == (0, False)

    tracker.set_value(5)
    assert (tracker.value(), tracker.is_done()) == (5, False)

    tracker.set_value(tracker.total)
    assert (tracker.value(), tracker.is_done()) == (100, True)


def test_value():
    tracker = Tracker()
    assert tracker.value() == 0
    tracker.set_value(5)
    assert tracker.value() == 5


def test_update_message():
    tracker = Tracker(message="foo")
    assert tracker.message == "foo"
    tracker.update_message("bar")
    assert tracker.message == "bar"


def test_update_total():
    tracker = Tracker(total=100)
    assert not tracker.is_done()
    steps = [
        ("set_value", 100, True),
        ("update_total", 101, False),
        ("set_value", 101, True),
        ("update_total", 100, True),
        ("set_value", 100, True),
    ]
    for method, amount, done in steps:
        getattr(tracker, method)(amount)
        assert tracker.is_done() is done, (method, amount)


def test_negative_total_becomes_max_on_start():
    tracker = Tracker(total=-1)
    tracker.start()
    assert tracker.total == MAX_INT64


def test_elapsed_is_frozen_once_done():
    tracker = Tracker(total=1)
    tracker.increment(1)
    first = tracker._elapsed()
    time.sleep(0.01)
    assert tracker._elapsed() == first