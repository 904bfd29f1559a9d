"""Pattern classifiers that turn context fragments into schedule fields."""

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Tuple

from .anchors import AnchorDetector
from .context import AnchorContext
from .dictionaries import DEFAULT_DICTIONARIES, LocaleDictionaries
from .models import Anchor, Subgroup, WeekParity, Weekday

_UPPER = 'А-ЯЁA-Z'
_LOWER = 'а-яёa-z'


@dataclass(frozen=True)
class FieldRule:
    """One independent classifier: returns a value for a matching text, else None."""
    name: str
    extract: Callable[[str], Any]


@dataclass
class ExtractedFields:
    teacher: Optional[str] = None
    room: Optional[str] = None
    subgroup: Optional[Subgroup] = None
    week_parity: Optional[WeekParity] = None
    weekday: Optional[Weekday] = None


class FieldExtractor:
    """
    Registry of field classifiers shared by the positional and flat-line parsers.

    Every field scans the same candidate list on its own and keeps its first
    match, so one text may fill several fields.
    """

    def __init__(
        self,
        dictionaries: Optional[LocaleDictionaries] = None,
        detector: Optional[AnchorDetector] = None
    ):
        self.dictionaries = d = dictionaries or DEFAULT_DICTIONARIES
        self.detector = detector or AnchorDetector(d)

        # Surname followed by two initials: "Иванов И.И.", "Smith J. K."
        self._initials_re = re.compile(
            rf'[{_UPPER}][{_LOWER}\-]+\s+[{_UPPER}]\.\s?[{_UPPER}]\.'
        )
        self._academic_re = re.compile(
            r'(?<!\w)(?:' + '|'.join(re.escape(t) for t in d.academic_titles) + r')(?!\w)',
            re.IGNORECASE,
        )
        # Two or more capitalized Latin/German words: "Anna Schmidt"
        self._capitalized_re = re.compile(
            r'(?<!\w)[A-ZÄÖÜ][a-zäöüß]+(?:\s+[A-ZÄÖÜ][a-zäöüß]+)+(?!\w)'
        )

        room_kw = '|'.join(re.escape(k) for k in d.room_keywords)
        self._room_keyword_re = re.compile(
            r'(?<!\w)(?:' + room_kw + r')[^\W\d]*\.?\s*:?\s*(\w*\d[\w\-/]*)',
            re.IGNORECASE,
        )
        # Keyword as a whole word followed by any token: "Room Lab", "каб. A"
        self._room_word_re = re.compile(
            r'(?<!\w)(?:' + room_kw + r')(?!\w)\.?\s*:?\s*(\w[\w\-/]*)',
            re.IGNORECASE,
        )
        self._room_number_re = re.compile(r'(?:^|\s)(\d{2,5})\s*$')

        sub_kw = '|'.join(re.escape(k) for k in d.subgroup_keywords)
        self._subgroup_re = re.compile(
            r'(?<!\w)(?:' + sub_kw + r')\w*\.?\s*[:№#]?\s*([12])(?!\d)'
            r'|(?<!\d)([12])\s*[-.]?\s*(?:' + sub_kw + r')',
            re.IGNORECASE,
        )

        self.rules: Tuple[FieldRule, ...] = (
            FieldRule('teacher', self.extract_teacher),
            FieldRule('room', self.extract_room),
            FieldRule('subgroup', self.extract_subgroup),
            FieldRule('week_parity', self.extract_week_parity),
            FieldRule('weekday', self.extract_weekday),
        )

    # Classifiers

    def is_meta(self, text: str) -> bool:
        """True for table-header labels such as "Дисциплина" or "Преподаватель"."""
        low = (text or '').lower()
        return any(k in low for k in self.dictionaries.meta_keywords)

    def is_time(self, text: str) -> bool:
        return self.detector.has_anchor_pattern(text)

    def looks_like_teacher(self, text: str) -> bool:
        if not text or self.is_meta(text):
            return False
        return bool(
            self._initials_re.search(text)
            or self._academic_re.search(text)
            or self._capitalized_re.search(text)
        )

    def extract_teacher(self, text: str) -> Optional[str]:
        return text.strip() if self.looks_like_teacher(text) else None

    def extract_room(self, text: str) -> Optional[str]:
        """
        Extract a room number.

        Args:
            text: Candidate text

        Returns:
            Token after a room keyword ("Ауд. 305" -> "305", "Room Lab" -> "Lab"),
            else a trailing 2-5 digit number, else None
        """
        if not text:
            return None
        m = self._room_keyword_re.search(text)
        if m:
            return m.group(1)
        m = self._room_word_re.search(text)
        if m:
            return m.group(1)
        # Bare numbers inside header labels are column captions, not rooms.
        if self.is_meta(text):
            return None
        m = self._room_number_re.search(text.strip())
        if m:
            return m.group(1)
        return None

    def extract_subgroup(self, text: str) -> Optional[Subgroup]:
        if not text:
            return None
        stripped = text.strip()
        if stripped == '1':
            return Subgroup.ONE
        if stripped == '2':
            return Subgroup.TWO
        m = self._subgroup_re.search(text)
        if not m:
            return None
        digit = m.group(1) or m.group(2)
        return Subgroup.ONE if digit == '1' else Subgroup.TWO

    def extract_week_parity(self, text: str) -> Optional[WeekParity]:
        if not text:
            return None
        low = self.dictionaries.strip_weekday_names(text)
        if any(k in low for k in self.dictionaries.odd_week_keywords):
            return WeekParity.ODD
        if any(k in low for k in self.dictionaries.even_week_keywords):
            return WeekParity.EVEN
        return None

    def extract_weekday(self, text: str) -> Optional[Weekday]:
        return self.dictionaries.find_weekday(text)

    # Aggregation

    def fill(self, texts: Iterable[str]) -> ExtractedFields:
        """
        Run every rule over the candidates.

        Args:
            texts: Candidate texts in priority order

        Returns:
            ExtractedFields holding the first match of each rule
        """
        texts = list(texts)
        fields = ExtractedFields()
        for rule in self.rules:
            for text in texts:
                value = rule.extract(text)
                if value is not None:
                    setattr(fields, rule.name, value)
                    break
        return fields

    def is_title_candidate(self, text: str) -> bool:
        if not text or not text.strip():
            return False
        return not (
            self.is_time(text)
            or self.looks_like_teacher(text)
            or self.extract_room(text) is not None
            or self.is_meta(text)
        )

    def longest_candidate(self, texts: Iterable[str]) -> Optional[str]:
        best = None
        for text in texts:
            if not self.is_title_candidate(text):
                continue
            # Strict comparison keeps the first of equally long texts.
            if best is None or len(text.strip()) > len(best):
                best = text.strip()
        return best

    def resolve_title(self, anchor: Anchor, ctx: AnchorContext, placeholder: str) -> str:
        """
        Pick the title of an anchor.

        Order: text after a plain time range, longest clean fragment above,
        everything to the right joined, longest clean fragment below,
        then the placeholder.
        """
        if anchor.trailing_text:
            return anchor.trailing_text

        title = self.longest_candidate(f.text for f in ctx.above)
        if title:
            return title

        joined = ' '.join(f.text.strip() for f in ctx.same_row_right).strip()
        if joined and not self.is_meta(joined):
            return joined

        title = self.longest_candidate(f.text for f in ctx.below)
        if title:
            return title

        return placeholder
