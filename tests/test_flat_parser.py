"""Flat line parser tests."""
from datetime import time

from schedule_engine.config import ParserConfig
from schedule_engine.flat_parser import FlatLineParser
from schedule_engine.models import Weekday


def test_reads_fields_from_following_lines():
    lines = [
        "Понедельник",
        "08:30-10:00",
        "Математика",
        "Иванов И.И.",
        "ауд. 210",
        "10:10-11:40 Физика",
        "Петров П.П.",
    ]
    first, second = FlatLineParser().parse(lines)

    assert first.title == "Математика"
    assert (first.start, first.end) == (time(8, 30), time(10, 0))
    assert first.teacher == "Иванов И.И."
    assert first.room == "210"

    assert second.title == "Физика"
    assert second.teacher == "Петров П.П."
    assert second.room is None


def test_placeholder_when_window_has_only_labels_and_times():
    items = FlatLineParser().parse(["9:00-10:30", "Дисциплина", "11:00-12:00 B"])

    assert [i.title for i in items] == ["Занятие", "B"]


def test_first_plain_line_is_title_even_if_it_names_a_day():
    item, = FlatLineParser().parse(["9:00-10:30", "Вторник", "Семинар"])

    assert item.title == "Вторник"
    assert item.weekday == Weekday.TUESDAY


def test_window_size_is_configurable():
    parser = FlatLineParser(config=ParserConfig(flat_window=1, placeholder_title="Lesson"))
    item, = parser.parse(["9:00-10:30", "", "Семинар"])

    assert item.title == "Lesson"


def test_invalid_ranges_and_duplicates_are_dropped():
    items = FlatLineParser().parse(["12:00-11:00 X", "9:00-10:30 A", "9:00-10:30 A"])

    assert [i.title for i in items] == ["A"]


def test_no_time_lines():
    assert FlatLineParser().parse(["Расписание", "Группа 101"]) == []
