"""Context window collection tests."""
import pytest

from schedule_engine.anchors import AnchorDetector
from schedule_engine.config import ParserConfig
from schedule_engine.context import ContextCollector
from schedule_engine.models import Fragment
from schedule_engine.rows import RowClusterer


def _collect(fragments, position=0, config=None):
    detector = AnchorDetector()
    rows = RowClusterer().cluster(fragments)
    anchors = detector.detect(rows)
    return ContextCollector(detector, config).collect(rows, anchors, position)


def _texts(fragments):
    return [f.text for f in fragments]


def test_above_is_nearest_row_first_and_bounded(frag):
    ctx = _collect([
        frag("three", 0.3, 0.95),
        frag("two", 0.3, 0.90),
        frag("one", 0.3, 0.85),
        frag("9:00-10:30", 0.05, 0.80),
    ])

    assert _texts(ctx.above) == ["one", "two"]


def test_above_stops_at_previous_anchor_row(frag):
    ctx = _collect([
        frag("8:00-8:45 A", 0.05, 0.90),
        frag("between", 0.3, 0.85),
        frag("9:00-10:30", 0.05, 0.80),
    ], position=1)

    assert _texts(ctx.above) == ["between"]


def test_below_stops_before_next_anchor_row(frag):
    ctx = _collect([
        frag("9:00-10:30", 0.05, 0.90),
        frag("Room 101", 0.3, 0.85),
        frag("11:00-12:30 B", 0.05, 0.80),
        frag("after", 0.3, 0.75),
    ])

    assert _texts(ctx.below) == ["Room 101"]


def test_below_is_bounded_by_lookahead(frag):
    fragments = [frag("9:00-10:30", 0.05, 0.95)]
    fragments += [frag(f"line {i}", 0.3, 0.90 - i * 0.05) for i in range(8)]
    ctx = _collect(fragments)

    assert _texts(ctx.below) == [f"line {i}" for i in range(6)]

    ctx = _collect(fragments, config=ParserConfig(below_lookahead=2))
    assert _texts(ctx.below) == ["line 0", "line 1"]


def test_same_row_right_respects_right_edge(frag):
    ctx = _collect([
        frag("left", 0.0, 0.5, width=0.04),
        frag("9:00-10:30", 0.05, 0.5, width=0.2),
        frag("touching", 0.249, 0.5),
        frag("overlapping", 0.2, 0.5, width=0.01),
        frag("far", 0.6, 0.5),
    ])

    assert _texts(ctx.same_row_right) == ["touching", "far"]


@pytest.mark.parametrize("lookback", [0, 1])
def test_zero_or_small_lookback(frag, lookback):
    ctx = _collect([
        frag("two", 0.3, 0.90),
        frag("one", 0.3, 0.85),
        frag("9:00-10:30", 0.05, 0.80),
    ], config=ParserConfig(above_lookback=lookback))

    assert _texts(ctx.above) == ["one"][:lookback]


def test_duplicate_fragments_are_listed_once(frag):
    dup = frag("Lab", 0.3, 0.85)
    ctx = _collect([frag("9:00-10:30", 0.05, 0.90), dup, Fragment(dup.text, dup.box)])

    assert _texts(ctx.below) == ["Lab"]
    assert _texts(ctx.all()) == ["Lab"]
