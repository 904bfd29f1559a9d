"""Fallback parser for plain ordered lines without geometry."""

from typing import List, Optional, Sequence

from .assembler import ItemAssembler
from .config import ParserConfig
from .fields import FieldExtractor
from .models import ScheduleItem


class FlatLineParser:
    """Scans lines top-to-bottom and reads fields from a short window after each time line."""

    def __init__(
        self,
        extractor: Optional[FieldExtractor] = None,
        config: Optional[ParserConfig] = None,
        assembler: Optional[ItemAssembler] = None
    ):
        self.extractor = extractor or FieldExtractor()
        self.config = config or ParserConfig()
        self.assembler = assembler or ItemAssembler()

    def parse(self, lines: Sequence[str]) -> List[ScheduleItem]:
        """
        Parse an ordered list of text lines.

        Args:
            lines: Lines in reading order

        Returns:
            Validated, deduplicated schedule items
        """
        detector = self.extractor.detector
        placeholder = self.config.placeholder_title
        items = []

        for i, line in enumerate(lines):
            matched = detector.match_range(line)
            if not matched:
                continue
            timeslot, trailing = matched

            window = list(lines[i + 1:i + 1 + self.config.flat_window])
            fields = self.extractor.fill(window)

            title = trailing or None
            if title is None:
                for extra in window:
                    if (
                        extra.strip()
                        and not self.extractor.is_meta(extra)
                        and not self.extractor.is_time(extra)
                    ):
                        title = extra.strip()
                        break

            items.append(self.assembler.build(timeslot, title or placeholder, fields))

        return self.assembler.finalize(items)
