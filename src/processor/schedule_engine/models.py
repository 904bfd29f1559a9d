"""Data models for schedule extraction."""

from dataclasses import dataclass, field
from datetime import time
from typing import Any, Dict, List, Optional, Sequence, Tuple
from enum import Enum


class Weekday(Enum):
    """Days of the week, valued by weekday code (Sunday=1 ... Saturday=7)."""
    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @classmethod
    def from_code(cls, code: Optional[int]) -> Optional['Weekday']:
        """
        Look up a weekday by its numeric code.

        Args:
            code: Weekday code in 1..7

        Returns:
            Weekday enum or None if the code is out of range
        """
        if not isinstance(code, int):
            return None
        try:
            return cls(code)
        except ValueError:
            return None

    @property
    def code(self) -> int:
        return self.value

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]


_SHORT_NAMES = {
    Weekday.MONDAY: "Пн",
    Weekday.TUESDAY: "Вт",
    Weekday.WEDNESDAY: "Ср",
    Weekday.THURSDAY: "Чт",
    Weekday.FRIDAY: "Пт",
    Weekday.SATURDAY: "Сб",
    Weekday.SUNDAY: "Вс",
}


class Subgroup(Enum):
    """Split of a class into groups. Only ONE and TWO are ever extracted."""
    ASK = "ask"
    ONE = "one"
    TWO = "two"
    BOTH = "both"


class WeekParity(Enum):
    """Odd/even week recurrence. NONE means every week."""
    NONE = "none"
    EVEN = "even"
    ODD = "odd"


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


@dataclass(frozen=True)
class BoundingBox:
    """Normalized rectangle in [0,1]x[0,1] with origin at the bottom-left."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def mid_y(self) -> float:
        return (self.min_y + self.max_y) / 2.0

    @classmethod
    def from_polygon(
        cls,
        points: Sequence[Sequence[float]],
        image_width: float,
        image_height: float
    ) -> 'BoundingBox':
        """
        Convert a pixel polygon (origin top-left) to a normalized box.

        Args:
            points: Polygon corners as [x, y] pixel pairs
            image_width: Source image width in pixels
            image_height: Source image height in pixels

        Returns:
            BoundingBox with the y axis flipped so that larger y is higher up
        """
        xs = [float(p[0]) for p in points]
        ys = [float(p[1]) for p in points]
        w = float(image_width) or 1.0
        h = float(image_height) or 1.0
        return cls(
            min_x=_clamp(min(xs) / w),
            min_y=_clamp(1.0 - max(ys) / h),
            max_x=_clamp(max(xs) / w),
            max_y=_clamp(1.0 - min(ys) / h),
        )

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'BoundingBox':
        return cls(
            min_x=float(d["minX"]),
            min_y=float(d["minY"]),
            max_x=float(d["maxX"]),
            max_y=float(d["maxY"]),
        )

    def to_dict(self) -> Dict[str, float]:
        return {"minX": self.min_x, "minY": self.min_y, "maxX": self.max_x, "maxY": self.max_y}


@dataclass(frozen=True)
class Fragment:
    """A piece of OCR text with its bounding box."""
    text: str
    box: Optional[BoundingBox] = None
    confidence: float = field(default=1.0, compare=False)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Fragment':
        box = d.get("box")
        return cls(
            text=str(d.get("text", "")),
            box=BoundingBox.from_dict(box) if box else None,
            confidence=float(d.get("confidence", 1.0)),
        )


@dataclass
class Row:
    """Fragments sharing an approximate vertical centre, ordered left-to-right."""
    index: int
    fragments: List[Fragment] = field(default_factory=list)

    @property
    def text(self) -> str:
        return ' '.join(f.text for f in self.fragments)


@dataclass(frozen=True)
class TimeSlot:
    """A start/end pair of times of day."""
    start_time: time
    end_time: time
    raw_text: str = ""

    @property
    def start_minutes(self) -> int:
        return self.start_time.hour * 60 + self.start_time.minute

    @property
    def end_minutes(self) -> int:
        return self.end_time.hour * 60 + self.end_time.minute

    def __str__(self) -> str:
        return f"{self.start_time.strftime('%H:%M')}-{self.end_time.strftime('%H:%M')}"


@dataclass(frozen=True)
class Anchor:
    """A time range detected inside a fragment."""
    row_index: int
    x_position: float
    timeslot: TimeSlot
    fragment: Fragment
    weekday_hint: Optional[Weekday] = None
    # Text following the matched range; only set for the plain time pattern.
    trailing_text: str = ""

    @property
    def start(self) -> time:
        return self.timeslot.start_time

    @property
    def end(self) -> time:
        return self.timeslot.end_time


@dataclass(frozen=True)
class ScheduleItem:
    """Represents a single class in the weekly schedule."""
    title: str
    start: time
    end: time
    teacher: Optional[str] = None
    room: Optional[str] = None
    weekday: Optional[Weekday] = None
    subgroup: Optional[Subgroup] = None
    week_parity: Optional[WeekParity] = None

    @property
    def start_minutes(self) -> int:
        return self.start.hour * 60 + self.start.minute

    @property
    def end_minutes(self) -> int:
        return self.end.hour * 60 + self.end.minute

    def dedup_key(self) -> Tuple:
        return (
            self.title.lower(),
            self.teacher,
            self.room,
            self.start,
            self.end,
            self.weekday,
            self.subgroup,
            self.week_parity,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'teacher': self.teacher,
            'room': self.room,
            'start': self.start.strftime('%H:%M'),
            'end': self.end.strftime('%H:%M'),
            'weekday': self.weekday.code if self.weekday else None,
            'subgroup': self.subgroup.value if self.subgroup else None,
            'week_parity': self.week_parity.value if self.week_parity else None,
        }

    def __str__(self) -> str:
        day = self.weekday.short_name if self.weekday else "-"
        return f"{day} {self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}: {self.title}"


@dataclass
class ScheduleDocument:
    """Outcome of one parse, with enough counts for the caller to report status."""
    source: str
    items: List[ScheduleItem] = field(default_factory=list)
    fragment_count: int = 0
    anchor_count: int = 0
    extraction_timestamp: Optional[str] = None

    @property
    def status(self) -> str:
        if self.fragment_count == 0:
            return "no_fragments"
        if self.anchor_count == 0:
            return "no_anchors"
        if not self.items:
            return "no_items"
        return "ok"

    def get_items_by_day(self, weekday: Optional[Weekday]) -> List[ScheduleItem]:
        """Get all items for a specific weekday (None selects undated items)."""
        return [item for item in self.items if item.weekday == weekday]

    def __len__(self) -> int:
        return len(self.items)
