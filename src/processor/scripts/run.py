"""Command-line entry point for the schedule engine."""

import sys
from datetime import date
from pathlib import Path
from typing import Optional

# Add parent directory to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from schedule_engine import (
    process_schedule,
    save_to_json,
    validate_document,
    is_supported_file
)
from schedule_engine.calendar_store import (
    CalendarImporter,
    ImportOptions,
    ScheduleKind,
    TransportMode,
    get_db_engine,
)
from schedule_engine.models import Subgroup, WeekParity

SUBGROUP_CHOICES = {'1': Subgroup.ONE, '2': Subgroup.TWO, 'both': Subgroup.BOTH}
PARITY_CHOICES = {'odd': WeekParity.ODD, 'even': WeekParity.EVEN}


def _option_value(name: str) -> Optional[str]:
    """Return the value following ``name`` in sys.argv, if any."""
    if name not in sys.argv:
        return None
    idx = sys.argv.index(name)
    if idx + 1 < len(sys.argv):
        return sys.argv[idx + 1]
    return None


def _date_option(name: str) -> Optional[date]:
    value = _option_value(name)
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{name} expects a date as YYYY-MM-DD, got '{value}'")


def _choice_option(name: str, choices: dict, default):
    value = _option_value(name)
    if value is None:
        return default
    if value.lower() not in choices:
        raise ValueError(f"{name} expects one of {', '.join(choices)}, got '{value}'")
    return choices[value.lower()]


def _build_import_options() -> ImportOptions:
    return ImportOptions(
        schedule_kind=ScheduleKind.SINGLE_DAY if '--single-day' in sys.argv else ScheduleKind.WEEKLY,
        anchor_date=_date_option('--anchor'),
        week_parity=_choice_option('--parity', PARITY_CHOICES, WeekParity.NONE),
        subgroup=_choice_option('--subgroup', SUBGROUP_CHOICES, Subgroup.ASK),
        repeat_until=_date_option('--until'),
        campus_address=_option_value('--address'),
        transport=_choice_option(
            '--transport', {m.value: m for m in TransportMode}, TransportMode.WALKING
        ),
    )


def print_usage():
    print("="*70)
    print("SCHEDULE EXTRACTOR - Command Line Interface")
    print("="*70)
    print("\nUsage: python scripts/run.py <file_path> [options]")
    print("\nArguments:")
    print("  file_path    Timetable photo, PDF, fragments JSON or text file (required)")
    print("\nOptions:")
    print("  --output PATH          Output JSON file path")
    print("  --gpu                  Use GPU acceleration for OCR")
    print("  --lang CODE            PaddleOCR language (en, ru, german, ...)")
    print("  --db PATH              Import items into a SQLite calendar store")
    print("  --single-day           Import as a one-day schedule instead of weekly")
    print("  --anchor YYYY-MM-DD    First Monday (weekly) or the day (single-day)")
    print("  --parity odd|even      Default week parity for biweekly classes")
    print("  --subgroup 1|2|both    Keep only classes of this subgroup")
    print("  --until YYYY-MM-DD     Last day of the recurrence")
    print("  --address TEXT         Campus address stored as event location")
    print("  --transport MODE       walking or transit")
    print("\nExamples:")
    print("  python scripts/run.py timetable.jpg --lang ru")
    print("  python scripts/run.py fragments.json --output items.json")
    print("  python scripts/run.py timetable.jpg --db calendar.sqlite --subgroup 1 --until 2026-12-31")


def main():
    """Main entry point for command-line execution."""

    if len(sys.argv) < 2:
        print_usage()
        sys.exit(1)

    file_path = sys.argv[1]
    use_gpu = '--gpu' in sys.argv
    lang = _option_value('--lang') or 'en'
    output_path = _option_value('--output') or Path(file_path).stem + "_schedule.json"
    db_path = _option_value('--db')

    if not is_supported_file(file_path):
        print("\n✗ Error: Unsupported file format")
        print("  Supported formats: PNG, JPG, JPEG, BMP, TIFF, PDF, JSON, TXT")
        sys.exit(1)

    try:
        options = _build_import_options() if db_path else None

        document = process_schedule(file_path, use_gpu=use_gpu, lang=lang)

        warnings = validate_document(document)
        if warnings:
            print("\n" + "="*70)
            print("VALIDATION WARNINGS")
            print("="*70)
            for warning in warnings:
                print(f"⚠ {warning}")

        print("\n" + "="*70)
        print("SAVING RESULTS")
        print("="*70)
        save_to_json(document, output_path)

        if db_path:
            print("\n" + "="*70)
            print("CALENDAR IMPORT")
            print("="*70)
            importer = CalendarImporter(get_db_engine(db_path))
            result = importer.import_schedule(document.items, options)
            print(f"✓ Added events: {result.added_count}")
            print(f"  Skipped: {result.skipped_count}")

        print("\n✓ Processing completed successfully!")

    except FileNotFoundError as e:
        print(f"\n✗ File Error: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"\n✗ Validation Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\n✗ Processing Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
