"""Detection of time-range anchors inside row fragments."""

import re
from datetime import time
from typing import List, Optional, Tuple

from .dictionaries import DEFAULT_DICTIONARIES, LocaleDictionaries
from .models import Anchor, Fragment, Row, TimeSlot

# HH:MM or HH.MM with hour 0-23 and minute 00-59
_TIME = r'([01]?\d|2[0-3])[:.]([0-5]\d)'
_TRAILING_JUNK = ' \t,;:|-–—'


def _to_timeslot(match: re.Match, first_group: int, raw_text: str) -> TimeSlot:
    sh, sm, eh, em = (int(match.group(first_group + i)) for i in range(4))
    return TimeSlot(start_time=time(sh, sm), end_time=time(eh, em), raw_text=raw_text)


class AnchorDetector:
    """Finds plain and weekday-coupled time ranges in fragments."""

    def __init__(self, dictionaries: Optional[LocaleDictionaries] = None):
        self.dictionaries = dictionaries or DEFAULT_DICTIONARIES

        dashes = [c for c in self.dictionaries.range_connectors if not c.isalpha()]
        dash_class = '[' + ''.join(re.escape(c) for c in dashes) + ']'
        self._range_re = re.compile(
            r'(?<!\d)' + _TIME + r'\s*' + dash_class + r'\s*' + _TIME + r'(?!\d)'
        )

        connectors = '|'.join(
            re.escape(c) for c in sorted(self.dictionaries.range_connectors, key=len, reverse=True)
        )
        tokens = '|'.join(
            re.escape(t) for t, _ in sorted(self.dictionaries.coupled_weekday_tokens, key=lambda p: -len(p[0]))
        )
        # Day token, any non-digit filler, then a range: "Di 13:20 bis 15:45"
        self._coupled_re = re.compile(
            r'(?<!\w)(' + tokens + r')\.?(?!\w)[^\d]*?(?<!\d)'
            + _TIME + r'\s*(?:' + connectors + r')\s*' + _TIME + r'(?!\d)',
            re.IGNORECASE,
        )
        self._coupled_days = {t.lower(): wd for t, wd in self.dictionaries.coupled_weekday_tokens}

    def match_range(self, text: str) -> Optional[Tuple[TimeSlot, str]]:
        """
        Match the plain time-range pattern.

        Args:
            text: Fragment or line text

        Returns:
            (TimeSlot, trailing text after the range) or None
        """
        if not text:
            return None
        m = self._range_re.search(text)
        if not m:
            return None
        trailing = text[m.end():].strip(_TRAILING_JUNK)
        return _to_timeslot(m, 1, m.group(0)), trailing

    def has_anchor_pattern(self, text: str) -> bool:
        """True if the text would produce at least one anchor."""
        if not text:
            return False
        return bool(self._coupled_re.search(text) or self._range_re.search(text))

    def row_has_anchor_pattern(self, row: Row) -> bool:
        return any(self.has_anchor_pattern(f.text) for f in row.fragments)

    def detect_in_fragment(self, fragment: Fragment, row_index: int) -> List[Anchor]:
        """
        Find the anchors produced by a single fragment.

        Weekday-coupled ranges win; every non-overlapping one becomes an
        anchor. Otherwise at most one plain range is taken.

        Args:
            fragment: Fragment to scan
            row_index: Index of the row holding the fragment

        Returns:
            Anchors in order of appearance within the text
        """
        text = fragment.text or ''
        x = fragment.box.min_x if fragment.box is not None else 0.0

        anchors = []
        for m in self._coupled_re.finditer(text):
            anchors.append(Anchor(
                row_index=row_index,
                x_position=x,
                timeslot=_to_timeslot(m, 2, m.group(0)),
                fragment=fragment,
                weekday_hint=self._coupled_days.get(m.group(1).lower()),
            ))
        if anchors:
            return anchors

        matched = self.match_range(text)
        if matched:
            timeslot, trailing = matched
            anchors.append(Anchor(
                row_index=row_index,
                x_position=x,
                timeslot=timeslot,
                fragment=fragment,
                trailing_text=trailing,
            ))
        return anchors

    def detect(self, rows: List[Row]) -> List[Anchor]:
        """
        Detect anchors across all rows.

        Returns:
            Anchors ordered by (row index, x position); an empty list means
            no schedule was found
        """
        anchors: List[Anchor] = []
        for row in rows:
            for fragment in row.fragments:
                anchors.extend(self.detect_in_fragment(fragment, row.index))
        # Stable sort keeps text order for several anchors in one fragment.
        anchors.sort(key=lambda a: (a.row_index, a.x_position))
        return anchors
