"""Tests for tally.history."""

import threading

from tally.events import Event
from tally.history import History


def test_append_grows_by_one_per_event():
    history = History()

    for n in range(5):
        history.append(Event(kind="pass", line=n))
        assert len(history) == n + 1


def test_preserves_order():
    history = History()
    events = [Event(kind=kind) for kind in ("fail", "pass", "error")]
    for event in events:
        history.append(event)

    assert list(history) == events


def test_select_filters_in_order():
    history = History()
    for kind in ("fail", "pass", "error", "pass"):
        history.append(Event(kind=kind))

    assert [e.kind for e in history.select(lambda e: e.kind != "pass")] == ["fail", "error"]


def test_snapshot_is_not_affected_by_later_appends():
    history = History()
    history.append(Event(kind="pass"))
    snapshot = history.snapshot()
    history.append(Event(kind="fail"))

    assert len(snapshot) == 1


def test_concurrent_appends_are_all_recorded():
    history = History()

    def feed():
        for _ in range(200):
            history.append(Event(kind="pass"))

    threads = [threading.Thread(target=feed) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(history) == 800
