"""Tests for tally.reports.documentation."""

from tally.events import Event, Testable
from tally.reports.documentation import ContextDiffRenderer, Documentation
from tally.types import Kind


class TestContextDiffRenderer:
    def test_prints_only_new_innermost_frame(self, console, stream):
        renderer = ContextDiffRenderer(console)
        renderer.previous = ("b", "a")

        frames = renderer.render(("c", "b", "a"))

        assert frames == ["c"]
        assert stream.getvalue() == "\n" + "    " + "  " * 2 + "c"

    def test_identical_stack_prints_nothing(self, console, stream):
        renderer = ContextDiffRenderer(console)
        renderer.previous = ("b", "a")

        assert renderer.render(("b", "a")) == []
        assert stream.getvalue() == ""

    def test_empty_stack_prints_nothing_and_clears_state(self, console, stream):
        renderer = ContextDiffRenderer(console)
        renderer.previous = ("b", "a")

        assert renderer.render(()) == []
        assert stream.getvalue() == ""
        assert renderer.previous == ()

    def test_prints_every_frame_from_divergence(self, console, stream):
        renderer = ContextDiffRenderer(console)
        renderer.render(("inner", "outer"))
        stream.truncate(0)
        stream.seek(0)

        renderer.render(("deeper", "other", "outer"))

        assert stream.getvalue() == "\n      other\n        deeper"

    def test_revisited_frame_is_printed_again(self, console, stream):
        renderer = ContextDiffRenderer(console)
        renderer.render(("a",))
        renderer.render(("b",))
        renderer.render(("a",))

        assert stream.getvalue() == "\n    a\n    b\n    a"

    def test_compares_by_equality(self, console):
        renderer = ContextDiffRenderer(console)
        renderer.render(("".join(["wi", "th"]),))

        assert renderer.render(("with",)) == []


def test_narrates_suite_group_test_and_contexts(run, stream):
    doc = Documentation(run)
    events = [
        Event(kind=Kind.BEGIN_TEST_SUITE, testable=Testable(desc="unit")),
        Event(kind=Kind.BEGIN_GROUP, testable=Testable(desc="math")),
        Event(kind=Kind.BEGIN_TEST, testable=Testable(desc="adds")),
        Event(kind=Kind.PASS, testing_contexts=("with zero",)),
        Event(kind=Kind.FAIL, testing_contexts=("with zero",)),
        Event(kind=Kind.BEGIN_TEST, var="subtracts"),
        Event(kind=Kind.ERROR, testing_contexts=("negatives", "with zero")),
        Event(kind=Kind.END_GROUP),
    ]

    for event in events:
        doc(event)

    assert stream.getvalue() == (
        "--- unit ---------------------------"
        "\nmath"
        "\n  adds"
        "\n    with zero"
        " FAIL"
        "\n  subtracts"
        "\n      negatives"
        " ERROR"
        "\n"
    )


def test_new_group_resets_printed_contexts(run, stream):
    doc = Documentation(run)
    doc(Event(kind=Kind.PASS, testing_contexts=("ctx",)))
    doc(Event(kind=Kind.BEGIN_GROUP, testable=Testable(desc="next")))
    doc(Event(kind=Kind.PASS, testing_contexts=("ctx",)))

    assert stream.getvalue() == "\n    ctx\nnext\n    ctx"


def test_each_instance_keeps_its_own_stack(run, stream):
    first, second = Documentation(run), Documentation(run)
    event = Event(kind=Kind.PASS, testing_contexts=("ctx",))

    first(event)
    second(event)

    assert stream.getvalue() == "\n    ctx\n    ctx"
