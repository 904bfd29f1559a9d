"""Schedule Engine Package for extracting weekly class schedules from OCR fragments."""

__version__ = "0.1.0"

from .main import process_schedule, save_to_json, load_fragments_json
from .models import (
    BoundingBox,
    Fragment,
    ScheduleDocument,
    ScheduleItem,
    Subgroup,
    TimeSlot,
    WeekParity,
    Weekday,
)
from .config import ParserConfig
from .dictionaries import DEFAULT_DICTIONARIES, LocaleDictionaries
from .parser import ScheduleParser
from .calendar_store import CalendarImporter, ImportOptions, ImportResult
from .utils import validate_document, is_supported_file

__all__ = [
    'process_schedule',
    'save_to_json',
    'load_fragments_json',
    'BoundingBox',
    'Fragment',
    'ScheduleDocument',
    'ScheduleItem',
    'Subgroup',
    'TimeSlot',
    'WeekParity',
    'Weekday',
    'ParserConfig',
    'DEFAULT_DICTIONARIES',
    'LocaleDictionaries',
    'ScheduleParser',
    'CalendarImporter',
    'ImportOptions',
    'ImportResult',
    'validate_document',
    'is_supported_file',
]
