"""Weekday propagation tests."""
from schedule_engine.models import Weekday
from schedule_engine.rows import RowClusterer
from schedule_engine.weekdays import WeekdayPropagator


def _rows(frag, texts):
    y = 0.95
    fragments = []
    for text in texts:
        fragments.append(frag(text, 0.05, y))
        y -= 0.05
    return RowClusterer().cluster(fragments)


def test_rows_before_first_header_have_no_weekday(frag):
    rows = _rows(frag, ["Расписание", "Понедельник", "9:00-10:30 A"])
    marks = WeekdayPropagator().propagate(rows, {2})

    assert marks == [None, Weekday.MONDAY, Weekday.MONDAY]


def test_header_changes_current_weekday(frag):
    rows = _rows(frag, ["Mittwoch", "9:00-10:30 A", "Donnerstag", "9:00-10:30 B"])
    marks = WeekdayPropagator().propagate(rows, {1, 3})

    assert marks == [Weekday.WEDNESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.THURSDAY]


def test_anchor_rows_never_update_weekday(frag):
    # "Mo" inside an anchor row belongs to the anchor, not to a header.
    rows = _rows(frag, ["Sonntag", "Mo 9:00-10:30", "11:00-12:00 B"])
    marks = WeekdayPropagator().propagate(rows, {1, 2})

    assert marks == [Weekday.SUNDAY, Weekday.SUNDAY, Weekday.SUNDAY]


def test_abbreviations_match_whole_words_only(frag):
    rows = _rows(frag, ["Пт", "Спорт", "9:00-10:30 A"])
    marks = WeekdayPropagator().propagate(rows, {2})

    assert marks == [Weekday.FRIDAY, Weekday.FRIDAY, Weekday.FRIDAY]
