"""SQLite calendar store that receives imported schedule items."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Tuple

from sqlalchemy import (
    Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint, create_engine, select
)
from sqlalchemy.orm import DeclarativeBase, Session, relationship

from .models import ScheduleItem, Subgroup, WeekParity
from .utils import next_monday, next_working_day

DEFAULT_CALENDAR_NAME = "Расписание"


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class Calendar(Base):
    """A named calendar that groups imported events."""
    __tablename__ = "calendars"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False)

    events = relationship("CalendarEvent", back_populates="calendar")


class CalendarEvent(Base):
    """First occurrence of a class plus its weekly recurrence rule."""
    __tablename__ = "calendar_events"
    __table_args__ = (
        UniqueConstraint("calendar_id", "title", "starts_at", "ends_at", name="uq_event_slot"),
    )

    id = Column(Integer, primary_key=True)
    calendar_id = Column(Integer, ForeignKey("calendars.id"), nullable=False)
    title = Column(String(300), nullable=False)
    notes = Column(String(500), nullable=True)
    location = Column(String(500), nullable=True)
    starts_at = Column(DateTime, nullable=False)
    ends_at = Column(DateTime, nullable=False)
    recurrence_interval_weeks = Column(Integer, nullable=False, default=1)
    recurrence_until = Column(Date, nullable=True)
    transport = Column(String(20), nullable=True)

    calendar = relationship("Calendar", back_populates="events")


class ScheduleKind(Enum):
    SINGLE_DAY = "single_day"
    WEEKLY = "weekly"


class TransportMode(Enum):
    WALKING = "walking"
    TRANSIT = "transit"


@dataclass
class ImportOptions:
    """Parameters chosen by the user before importing a parsed schedule."""
    schedule_kind: ScheduleKind = ScheduleKind.WEEKLY
    # Monday of the first week for WEEKLY, the day itself for SINGLE_DAY.
    anchor_date: Optional[date] = None
    week_parity: WeekParity = WeekParity.NONE
    subgroup: Subgroup = Subgroup.ASK
    repeat_until: Optional[date] = None
    campus_address: Optional[str] = None
    transport: TransportMode = TransportMode.WALKING
    calendar_name: str = DEFAULT_CALENDAR_NAME

    def resolved_anchor(self, today: Optional[date] = None) -> date:
        if self.anchor_date is not None:
            return self.anchor_date
        today = today or date.today()
        if self.schedule_kind == ScheduleKind.WEEKLY:
            return next_monday(today)
        return next_working_day(today, today=today)


@dataclass
class ImportResult:
    added_count: int
    skipped_count: int


def get_db_engine(db_path: str = "schedule.sqlite"):
    """
    Create and return a SQLAlchemy Engine connected to a SQLite database.

    Args:
        db_path: Path to the SQLite file, or ":memory:"

    Returns:
        sqlalchemy.Engine: Database engine instance
    """
    if db_path == ":memory:":
        return create_engine("sqlite://", echo=False)
    full_db_path = Path(db_path).expanduser().resolve()
    return create_engine(f"sqlite:///{full_db_path}", echo=False)


def create_tables(engine) -> None:
    """Create all database tables defined in Base.metadata."""
    Base.metadata.create_all(engine)


def first_occurrence(
    item: ScheduleItem,
    schedule_kind: ScheduleKind,
    anchor: date
) -> Tuple[datetime, datetime]:
    """
    Compute the start and end of an item's first occurrence.

    Weekly schedules offset the anchor Monday by the item's weekday
    (Monday code 2 -> +0 days); items without a weekday, and single-day
    schedules, land on the anchor itself.
    """
    day = anchor
    if schedule_kind == ScheduleKind.WEEKLY and item.weekday is not None:
        day = anchor + timedelta(days=item.weekday.code - 2)
    return datetime.combine(day, item.start), datetime.combine(day, item.end)


def _keep_for_subgroup(item: ScheduleItem, chosen: Subgroup) -> bool:
    if chosen == Subgroup.ONE and item.subgroup == Subgroup.TWO:
        return False
    if chosen == Subgroup.TWO and item.subgroup == Subgroup.ONE:
        return False
    return True


def _event_notes(item: ScheduleItem) -> Optional[str]:
    notes = []
    if item.teacher:
        notes.append(item.teacher)
    if item.room:
        notes.append(f"Ауд.: {item.room}")
    return "\n".join(notes) if notes else None


class CalendarImporter:
    """Writes schedule items into the calendar store as recurring events."""

    def __init__(self, engine):
        self.engine = engine
        create_tables(engine)

    def import_schedule(
        self,
        items: Iterable[ScheduleItem],
        options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """
        Import items as weekly or biweekly recurring events.

        Items of the other subgroup are left out without being counted.
        Items whose event already exists in the calendar are skipped.

        Args:
            items: Parsed schedule items
            options: Import parameters

        Returns:
            ImportResult with added and skipped counts
        """
        options = options or ImportOptions()
        anchor = options.resolved_anchor()
        added = 0
        skipped = 0

        with Session(self.engine) as session:
            calendar = self._find_or_create_calendar(session, options.calendar_name)

            for item in items:
                if not _keep_for_subgroup(item, options.subgroup):
                    continue

                parity = item.week_parity or options.week_parity
                interval = 1 if parity == WeekParity.NONE else 2

                starts_at, ends_at = first_occurrence(item, options.schedule_kind, anchor)
                if ends_at <= starts_at:
                    skipped += 1
                    continue

                exists = session.scalar(
                    select(CalendarEvent.id).where(
                        CalendarEvent.calendar_id == calendar.id,
                        CalendarEvent.title == item.title,
                        CalendarEvent.starts_at == starts_at,
                        CalendarEvent.ends_at == ends_at,
                    )
                )
                if exists is not None:
                    skipped += 1
                    continue

                session.add(CalendarEvent(
                    calendar_id=calendar.id,
                    title=item.title,
                    notes=_event_notes(item),
                    location=options.campus_address or None,
                    starts_at=starts_at,
                    ends_at=ends_at,
                    recurrence_interval_weeks=interval,
                    recurrence_until=options.repeat_until,
                    transport=options.transport.value,
                ))
                session.flush()
                added += 1

            session.commit()

        return ImportResult(added_count=added, skipped_count=skipped)

    @staticmethod
    def _find_or_create_calendar(session: Session, name: str) -> Calendar:
        calendar = session.scalar(select(Calendar).where(Calendar.name == name))
        if calendar is None:
            calendar = Calendar(name=name, created_at=datetime.now(timezone.utc))
            session.add(calendar)
            session.flush()
        return calendar
