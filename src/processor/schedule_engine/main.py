"""Core execution logic for the schedule engine."""

import json
from pathlib import Path
from typing import List, Optional

from .models import Fragment, ScheduleDocument, Weekday
from .parser import ScheduleParser
from .utils import SUPPORTED_EXTENSIONS


def load_fragments_json(file_path: Path) -> List[Fragment]:
    """
    Read pre-recognized fragments from a JSON list of {text, box} records.

    Raises:
        ValueError: If the file is not a JSON list of fragment records
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('fragments')
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of fragments in {file_path}")

    try:
        return [Fragment.from_dict(d) for d in data]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed fragment in {file_path}: {e}")


def process_schedule(
    file_path: str,
    use_gpu: bool = False,
    lang: str = 'en',
    parser: Optional[ScheduleParser] = None
) -> ScheduleDocument:
    """
    Extract a weekly class schedule from a single file.

    Photos and PDFs go through OCR first; a ``.json`` list of fragments
    skips OCR; a ``.txt`` file is parsed line by line without geometry.

    Args:
        file_path: Absolute or relative path to the input file
        use_gpu: Whether to use GPU acceleration for OCR
        lang: PaddleOCR language code
        parser: Preconfigured parser (defaults to ScheduleParser())

    Returns:
        ScheduleDocument containing the extracted items

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file format is not supported
    """
    try:
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        suffix = file_path.suffix.lower()
        if suffix not in SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported file format: {file_path.suffix}. "
                f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
            )

        parser = parser or ScheduleParser()
        print(f"▶ Processing Schedule: {file_path.name}")

        if suffix == '.txt':
            print("\n[1/2] Reading lines...")
            lines = file_path.read_text(encoding='utf-8').splitlines()
            print(f"✓ Read {len(lines)} line(s)")

            print("\n[2/2] Parsing lines...")
            document = parser.parse_lines_document(str(file_path.absolute()), lines)
        else:
            if suffix == '.json':
                print("\n[1/2] Loading recognized fragments...")
                fragments = load_fragments_json(file_path)
            else:
                fragments = _recognize(file_path, use_gpu, lang)
            print(f"✓ {len(fragments)} text fragment(s)")

            print("\n[2/2] Parsing schedule layout...")
            document = parser.parse_document(str(file_path.absolute()), fragments)

        print(f"✓ Extracted {len(document.items)} schedule item(s) from {document.anchor_count} time range(s)")
        print(f"{'─'*60}")
        _print_document_summary(document)

        return document

    except (FileNotFoundError, ValueError) as e:
        print(f"\n✗ Validation error: {str(e)}")
        raise


def _recognize(file_path: Path, use_gpu: bool, lang: str) -> List[Fragment]:
    from .ocr_extractor import OCRExtractor
    from .preprocessor import DocumentPreprocessor

    print("\n[1/2] Recognizing text with PaddleOCR...")
    images = DocumentPreprocessor().process(file_path)
    extractor = OCRExtractor(use_gpu=use_gpu, lang=lang)

    fragments: List[Fragment] = []
    for idx, image in enumerate(images):
        print(f"  → Processing page {idx + 1}/{len(images)}...")
        page = extractor.extract_fragments(image)
        fragments.extend(page)
        print(f"    Extracted {len(page)} text fragments")

    avg_confidence = extractor.calculate_confidence_score(fragments)
    print(f"✓ OCR completed (avg confidence: {avg_confidence:.2%})")
    return fragments


def save_to_json(document: ScheduleDocument, output_path: str) -> None:
    """
    Save extracted schedule data to a JSON file.

    Args:
        document: ScheduleDocument to save
        output_path: Path to output JSON file
    """
    data = {
        'source': document.source,
        'status': document.status,
        'metadata': {
            'fragment_count': document.fragment_count,
            'anchor_count': document.anchor_count,
            'extraction_timestamp': document.extraction_timestamp,
        },
        'items': [item.to_dict() for item in document.items],
    }

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    print(f"✓ Saved to: {output_path}")


def _print_document_summary(document: ScheduleDocument) -> None:
    """Print a summary of the extracted document."""
    print(f"  Total Items: {len(document.items)}")

    for day in [*Weekday, None]:
        items = document.get_items_by_day(day)
        if items:
            label = day.name.title() if day else "No weekday"
            print(f"    {label}: {len(items)} items")

    if document.items:
        print("\n  Sample Items:")
        for i, item in enumerate(document.items[:3], 1):
            title = item.title[:40] + "..." if len(item.title) > 40 else item.title
            day = item.weekday.short_name if item.weekday else "-"
            print(f"    {i}. {day} | {item.start.strftime('%H:%M')}-{item.end.strftime('%H:%M')} | {title}")

        if len(document.items) > 3:
            print(f"    ... and {len(document.items) - 3} more items")
