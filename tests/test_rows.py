"""Row clustering tests."""
from schedule_engine.config import ParserConfig
from schedule_engine.rows import RowClusterer


def test_empty_input_gives_no_rows():
    assert RowClusterer().cluster([]) == []


def test_difference_at_tolerance_merges(frag):
    rows = RowClusterer().cluster([frag("A", 0.1, 0.50), frag("B", 0.4, 0.48)])

    assert len(rows) == 1
    assert [f.text for f in rows[0].fragments] == ["A", "B"]


def test_difference_above_tolerance_splits(frag):
    rows = RowClusterer().cluster([frag("A", 0.1, 0.50), frag("B", 0.4, 0.479)])

    assert [[f.text for f in r.fragments] for r in rows] == [["A"], ["B"]]


def test_rows_are_top_to_bottom_and_left_to_right(frag):
    fragments = [
        frag("bottom", 0.1, 0.2),
        frag("top-right", 0.6, 0.9),
        frag("middle", 0.1, 0.5),
        frag("top-left", 0.1, 0.905),
    ]
    rows = RowClusterer().cluster(fragments)

    assert [r.index for r in rows] == [0, 1, 2]
    assert [f.text for f in rows[0].fragments] == ["top-left", "top-right"]
    assert [r.text for r in rows[1:]] == ["middle", "bottom"]


def test_fragment_joins_first_matching_row_by_seed_centre(frag):
    # The third fragment is within tolerance of the second but not of the row seed.
    fragments = [frag("a", 0.1, 0.50), frag("b", 0.3, 0.485), frag("c", 0.5, 0.47)]
    rows = RowClusterer().cluster(fragments)

    assert [r.text for r in rows] == ["a b", "c"]


def test_custom_tolerance(frag):
    clusterer = RowClusterer(ParserConfig(row_tolerance=0.05))
    rows = clusterer.cluster([frag("A", 0.1, 0.50), frag("B", 0.4, 0.46)])

    assert len(rows) == 1


def test_fragments_without_box_are_ignored(frag):
    from schedule_engine.models import Fragment

    rows = RowClusterer().cluster([Fragment("loose"), frag("A", 0.1, 0.5)])

    assert [r.text for r in rows] == ["A"]
