"""Main module for running the schedule engine."""

import sys

from schedule_engine.main import process_schedule

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m schedule_engine <file_path>")
        print("\nExample: python -m schedule_engine /path/to/timetable.jpg")
        sys.exit(1)

    process_schedule(sys.argv[1])
