"""Validation, construction and deduplication of schedule items."""

from typing import Iterable, List, Optional

from .fields import ExtractedFields
from .models import ScheduleItem, TimeSlot, Weekday


def deduplicate_items(items: Iterable[ScheduleItem]) -> List[ScheduleItem]:
    """
    Drop repeated items, keeping the first occurrence.

    Args:
        items: Items in emission order

    Returns:
        Items with unique (title, teacher, room, times, weekday, subgroup,
        parity) keys, original order preserved
    """
    unique_items = []
    seen = set()

    for item in items:
        key = item.dedup_key()
        if key not in seen:
            seen.add(key)
            unique_items.append(item)

    return unique_items


class ItemAssembler:
    """Turns resolved anchor fields into validated ScheduleItems."""

    def build(
        self,
        timeslot: TimeSlot,
        title: str,
        fields: ExtractedFields,
        weekday: Optional[Weekday] = None
    ) -> Optional[ScheduleItem]:
        """
        Build one item, or None when the range does not move forward in time.

        Args:
            timeslot: Start and end of the class
            title: Resolved title
            fields: Classified context fields
            weekday: Weekday chosen by the caller; falls back to fields.weekday

        Returns:
            ScheduleItem, or None if end <= start
        """
        if timeslot.end_minutes <= timeslot.start_minutes:
            return None

        return ScheduleItem(
            title=title,
            start=timeslot.start_time,
            end=timeslot.end_time,
            teacher=fields.teacher,
            room=fields.room,
            weekday=weekday or fields.weekday,
            subgroup=fields.subgroup,
            week_parity=fields.week_parity,
        )

    def finalize(self, items: Iterable[Optional[ScheduleItem]]) -> List[ScheduleItem]:
        """Discard dropped anchors and deduplicate the rest."""
        return deduplicate_items(item for item in items if item is not None)
