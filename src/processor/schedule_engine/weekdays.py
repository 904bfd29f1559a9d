"""Carry-forward of day-of-week context across rows."""

from typing import List, Optional, Set

from .dictionaries import DEFAULT_DICTIONARIES, LocaleDictionaries
from .models import Row, Weekday


class WeekdayPropagator:
    """Assigns a weekday to every row from day-header rows above it."""

    def __init__(self, dictionaries: Optional[LocaleDictionaries] = None):
        self.dictionaries = dictionaries or DEFAULT_DICTIONARIES

    def propagate(self, rows: List[Row], anchor_rows: Set[int]) -> List[Optional[Weekday]]:
        """
        Walk rows top-to-bottom and mark each with the current weekday.

        Rows holding an anchor take the current weekday without changing it.
        Any other row is searched for a weekday name; the first hit becomes
        the current weekday. Rows without a hit inherit the current one.

        Args:
            rows: Rows in top-to-bottom order
            anchor_rows: Indices of rows that produced at least one anchor

        Returns:
            Weekday (or None) per row, aligned with ``rows``
        """
        current: Optional[Weekday] = None
        marks: List[Optional[Weekday]] = []

        for row in rows:
            if row.index not in anchor_rows:
                for fragment in row.fragments:
                    found = self.dictionaries.find_weekday(fragment.text)
                    if found:
                        current = found
                        break
            marks.append(current)

        return marks
