"""Calendar import tests against a temporary SQLite store."""
from datetime import date, datetime, time

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from schedule_engine.calendar_store import (
    CalendarEvent,
    CalendarImporter,
    ImportOptions,
    ScheduleKind,
    first_occurrence,
    get_db_engine,
)
from schedule_engine.models import ScheduleItem, Subgroup, WeekParity, Weekday

# A Monday
ANCHOR = date(2026, 10, 19)


@pytest.fixture
def engine(tmp_path):
    return get_db_engine(str(tmp_path / "calendar.sqlite"))


@pytest.fixture
def items():
    return [
        ScheduleItem(
            title="Математический анализ",
            start=time(8, 30),
            end=time(10, 0),
            teacher="Иванов И.И.",
            room="305",
            weekday=Weekday.MONDAY,
        ),
        ScheduleItem(
            title="Физика",
            start=time(10, 10),
            end=time(11, 40),
            weekday=Weekday.WEDNESDAY,
            week_parity=WeekParity.ODD,
            subgroup=Subgroup.ONE,
        ),
        ScheduleItem(
            title="Химия",
            start=time(12, 0),
            end=time(13, 30),
            weekday=Weekday.TUESDAY,
            subgroup=Subgroup.TWO,
        ),
    ]


def _events(engine):
    with Session(engine) as session:
        return list(session.scalars(select(CalendarEvent).options(selectinload(CalendarEvent.calendar)).order_by(CalendarEvent.starts_at)))


def test_first_occurrence_offsets_from_monday(items):
    start, end = first_occurrence(items[1], ScheduleKind.WEEKLY, ANCHOR)

    assert start == datetime(2026, 10, 21, 10, 10)
    assert end == datetime(2026, 10, 21, 11, 40)


def test_first_occurrence_single_day_ignores_weekday(items):
    start, _ = first_occurrence(items[1], ScheduleKind.SINGLE_DAY, date(2026, 10, 23))

    assert start == datetime(2026, 10, 23, 10, 10)


def test_import_filters_subgroup_and_sets_recurrence(engine, items):
    options = ImportOptions(
        anchor_date=ANCHOR,
        subgroup=Subgroup.ONE,
        repeat_until=date(2026, 12, 31),
        campus_address="Университетская наб., 7",
    )
    result = CalendarImporter(engine).import_schedule(items, options)

    # The subgroup-two class is left out without being counted as skipped.
    assert (result.added_count, result.skipped_count) == (2, 0)

    analysis, physics = _events(engine)
    assert analysis.starts_at == datetime(2026, 10, 19, 8, 30)
    assert analysis.recurrence_interval_weeks == 1
    assert analysis.notes == "Иванов И.И.\nАуд.: 305"
    assert analysis.location == "Университетская наб., 7"
    assert analysis.recurrence_until == date(2026, 12, 31)
    assert analysis.calendar.name == "Расписание"

    assert physics.starts_at == datetime(2026, 10, 21, 10, 10)
    assert physics.recurrence_interval_weeks == 2
    assert physics.notes is None


def test_default_parity_makes_every_item_biweekly(engine, items):
    options = ImportOptions(anchor_date=ANCHOR, subgroup=Subgroup.BOTH, week_parity=WeekParity.EVEN)
    CalendarImporter(engine).import_schedule(items, options)

    assert [e.recurrence_interval_weeks for e in _events(engine)] == [2, 2, 2]


def test_reimport_skips_existing_events(engine, items):
    options = ImportOptions(anchor_date=ANCHOR, subgroup=Subgroup.TWO)
    importer = CalendarImporter(engine)

    first = importer.import_schedule(items, options)
    second = importer.import_schedule(items, options)

    assert (first.added_count, first.skipped_count) == (2, 0)
    assert (second.added_count, second.skipped_count) == (0, 2)
    assert len(_events(engine)) == 2


def test_resolved_anchor_defaults():
    today = date(2026, 10, 18)  # Sunday

    assert ImportOptions().resolved_anchor(today) == date(2026, 10, 19)
    single_day = ImportOptions(schedule_kind=ScheduleKind.SINGLE_DAY)
    assert single_day.resolved_anchor(date(2026, 10, 20)) == date(2026, 10, 21)
    assert ImportOptions(anchor_date=ANCHOR).resolved_anchor(today) == ANCHOR


def test_in_memory_engine(items):
    result = CalendarImporter(get_db_engine(":memory:")).import_schedule(
        items[:1], ImportOptions(anchor_date=ANCHOR)
    )

    assert result.added_count == 1
