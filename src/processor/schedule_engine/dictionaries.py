"""Locale keyword tables used by the anchor detector and field classifiers."""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .models import Weekday


@dataclass(frozen=True)
class LocaleDictionaries:
    """
    Read-only keyword tables for Russian, English and German timetables.

    Order inside each tuple is significant: lookups return the first entry
    that matches. Build a new instance to add a language instead of mutating
    this one.
    """

    # Full names match as substrings (stems are fine, e.g. "воскрес").
    weekday_full_names: Tuple[Tuple[str, Weekday], ...]
    # Abbreviations match only as whole words.
    weekday_abbreviations: Tuple[Tuple[str, Weekday], ...]
    # Tokens that may prefix a time range inside one fragment ("Di 13:20 bis 15:45").
    coupled_weekday_tokens: Tuple[Tuple[str, Weekday], ...]
    room_keywords: Tuple[str, ...]
    subgroup_keywords: Tuple[str, ...]
    odd_week_keywords: Tuple[str, ...]
    even_week_keywords: Tuple[str, ...]
    meta_keywords: Tuple[str, ...]
    academic_titles: Tuple[str, ...]
    range_connectors: Tuple[str, ...]

    def find_weekday(self, text: str) -> Optional[Weekday]:
        """
        Return the weekday named anywhere in the text.

        Args:
            text: Fragment text

        Returns:
            Weekday of the first dictionary entry found, or None
        """
        if not text:
            return None
        low = text.lower()
        for name, weekday in self.weekday_full_names:
            if name in low:
                return weekday
        for abbr, weekday in self.weekday_abbreviations:
            if re.search(r'(?<!\w)' + re.escape(abbr) + r'(?!\w)', low):
                return weekday
        return None

    def strip_weekday_names(self, text: str) -> str:
        """Remove full weekday names so that their letters do not trigger other keywords."""
        low = text.lower()
        for name, _ in self.weekday_full_names:
            low = low.replace(name, ' ')
        return low


DEFAULT_DICTIONARIES = LocaleDictionaries(
    weekday_full_names=(
        ("понедельник", Weekday.MONDAY),
        ("вторник", Weekday.TUESDAY),
        ("среда", Weekday.WEDNESDAY),
        ("четверг", Weekday.THURSDAY),
        ("пятница", Weekday.FRIDAY),
        ("суббота", Weekday.SATURDAY),
        ("воскрес", Weekday.SUNDAY),
        ("monday", Weekday.MONDAY),
        ("tuesday", Weekday.TUESDAY),
        ("wednesday", Weekday.WEDNESDAY),
        ("thursday", Weekday.THURSDAY),
        ("friday", Weekday.FRIDAY),
        ("saturday", Weekday.SATURDAY),
        ("sunday", Weekday.SUNDAY),
        ("montag", Weekday.MONDAY),
        ("dienstag", Weekday.TUESDAY),
        ("mittwoch", Weekday.WEDNESDAY),
        ("donnerstag", Weekday.THURSDAY),
        ("freitag", Weekday.FRIDAY),
        ("samstag", Weekday.SATURDAY),
        ("sonnabend", Weekday.SATURDAY),
        ("sonntag", Weekday.SUNDAY),
    ),
    weekday_abbreviations=(
        ("пн", Weekday.MONDAY),
        ("вт", Weekday.TUESDAY),
        ("ср", Weekday.WEDNESDAY),
        ("чт", Weekday.THURSDAY),
        ("пт", Weekday.FRIDAY),
        ("сб", Weekday.SATURDAY),
        ("вс", Weekday.SUNDAY),
        ("mon", Weekday.MONDAY),
        ("tue", Weekday.TUESDAY),
        ("tues", Weekday.TUESDAY),
        ("wed", Weekday.WEDNESDAY),
        ("thu", Weekday.THURSDAY),
        ("thur", Weekday.THURSDAY),
        ("thurs", Weekday.THURSDAY),
        ("fri", Weekday.FRIDAY),
        ("sat", Weekday.SATURDAY),
        ("sun", Weekday.SUNDAY),
        ("mo", Weekday.MONDAY),
        ("di", Weekday.TUESDAY),
        ("mi", Weekday.WEDNESDAY),
        ("do", Weekday.THURSDAY),
        ("fr", Weekday.FRIDAY),
        ("sa", Weekday.SATURDAY),
        ("so", Weekday.SUNDAY),
    ),
    coupled_weekday_tokens=(
        ("mo", Weekday.MONDAY),
        ("di", Weekday.TUESDAY),
        ("mi", Weekday.WEDNESDAY),
        ("do", Weekday.THURSDAY),
        ("fr", Weekday.FRIDAY),
        ("sa", Weekday.SATURDAY),
        ("so", Weekday.SUNDAY),
    ),
    room_keywords=("ауд", "каб", "room", "aud"),
    subgroup_keywords=("п/г", "подгруппа", "подгр", "pg"),
    odd_week_keywords=("неделя 1", "нед. 1", "неч", "odd", "ungerade"),
    even_week_keywords=("неделя 2", "нед. 2", "чет", "even", "gerade"),
    meta_keywords=("дисциплина", "преподаватель", "ауд", "кафедра", "перерыв"),
    academic_titles=("dr", "prof"),
    range_connectors=("bis", "-", "–", "—"),
)
