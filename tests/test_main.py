"""File-level processing tests (no OCR involved)."""
import json

import pytest

from schedule_engine.main import load_fragments_json, process_schedule, save_to_json
from schedule_engine.models import Weekday


@pytest.fixture
def fragments_file(tmp_path):
    def box(x, y):
        return {"minX": x, "minY": y - 0.01, "maxX": x + 0.2, "maxY": y + 0.01}

    path = tmp_path / "page.json"
    path.write_text(json.dumps({"fragments": [
        {"text": "Dienstag", "box": box(0.05, 0.95)},
        {"text": "08:00-09:30 Analysis", "box": box(0.05, 0.90)},
        {"text": "Raum 101", "box": box(0.5, 0.90), "confidence": 0.7},
    ]}), encoding="utf-8")
    return path


def test_json_fragments_are_parsed_positionally(fragments_file):
    document = process_schedule(str(fragments_file))

    assert document.status == "ok"
    assert document.fragment_count == 3
    item, = document.items
    assert item.title == "Analysis"
    assert item.room == "101"
    assert item.weekday == Weekday.TUESDAY


def test_text_file_uses_flat_parser(tmp_path):
    path = tmp_path / "schedule.txt"
    path.write_text("Montag\n10:00-11:30 Chemie\nDr. Braun\n", encoding="utf-8")

    document = process_schedule(str(path))

    item, = document.items
    assert item.title == "Chemie"
    assert item.teacher == "Dr. Braun"
    assert document.anchor_count == 1


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        process_schedule(str(tmp_path / "missing.jpg"))


def test_unsupported_extension(tmp_path):
    path = tmp_path / "schedule.docx"
    path.write_bytes(b"")

    with pytest.raises(ValueError, match="Unsupported file format"):
        process_schedule(str(path))


@pytest.mark.parametrize("payload", ['{"items": []}', '[{"box": {"minX": 0}}]', '"text"'])
def test_malformed_fragment_json(tmp_path, payload):
    path = tmp_path / "bad.json"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(ValueError):
        load_fragments_json(path)


def test_plain_list_without_boxes(tmp_path):
    path = tmp_path / "lines.json"
    path.write_text(json.dumps([{"text": "9:00-10:30 Algebra"}]), encoding="utf-8")

    fragment, = load_fragments_json(path)
    assert fragment.box is None


def test_save_to_json(tmp_path, fragments_file):
    document = process_schedule(str(fragments_file))
    output = tmp_path / "out.json"

    save_to_json(document, str(output))

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["status"] == "ok"
    assert data["metadata"]["anchor_count"] == 1
    assert data["items"] == [{
        "title": "Analysis",
        "teacher": None,
        "room": "101",
        "start": "08:00",
        "end": "09:30",
        "weekday": 3,
        "subgroup": None,
        "week_parity": None,
    }]
