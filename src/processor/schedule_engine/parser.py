"""Parser to extract a weekly class schedule from positioned OCR fragments."""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from .anchors import AnchorDetector
from .assembler import ItemAssembler
from .config import ParserConfig
from .context import ContextCollector
from .dictionaries import DEFAULT_DICTIONARIES, LocaleDictionaries
from .fields import FieldExtractor
from .flat_parser import FlatLineParser
from .models import Anchor, Fragment, Row, ScheduleDocument, ScheduleItem
from .rows import RowClusterer
from .weekdays import WeekdayPropagator


class ScheduleParser:
    """Runs the layout-aware extraction pipeline and its flat-line fallback."""

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        dictionaries: Optional[LocaleDictionaries] = None
    ):
        """
        Wire the pipeline stages together.

        Args:
            config: Tolerances, window sizes and placeholder title
            dictionaries: Locale keyword tables shared by every stage
        """
        self.config = config or ParserConfig()
        self.dictionaries = dictionaries or DEFAULT_DICTIONARIES

        self.clusterer = RowClusterer(self.config)
        self.detector = AnchorDetector(self.dictionaries)
        self.propagator = WeekdayPropagator(self.dictionaries)
        self.collector = ContextCollector(self.detector, self.config)
        self.extractor = FieldExtractor(self.dictionaries, self.detector)
        self.assembler = ItemAssembler()
        self.flat_parser = FlatLineParser(self.extractor, self.config, self.assembler)

    def parse_positioned(self, fragments: Iterable[Fragment]) -> List[ScheduleItem]:
        """
        Parse fragments that carry bounding boxes.

        Args:
            fragments: OCR fragments in any order

        Returns:
            Schedule items in anchor order; empty when no time range is found
        """
        items, _ = self._run_positioned(fragments)
        return items

    def parse_lines(self, lines: Sequence[str]) -> List[ScheduleItem]:
        """Parse plain lines in reading order (no geometry)."""
        return self.flat_parser.parse(lines)

    def parse_fragments(self, fragments: Sequence[Fragment]) -> List[ScheduleItem]:
        """Positional parse, or the flat parse when any fragment has lost its box."""
        return self._parse_with_counts(fragments)[0]

    def parse_document(self, source: str, fragments: Sequence[Fragment]) -> ScheduleDocument:
        """
        Parse fragments and wrap the result with the counts the caller reports on.

        Args:
            source: Path or label of the source image
            fragments: OCR fragments

        Returns:
            ScheduleDocument with items, fragment and anchor counts
        """
        fragments = list(fragments)
        items, anchor_count = self._parse_with_counts(fragments)
        return ScheduleDocument(
            source=source,
            items=items,
            fragment_count=len(fragments),
            anchor_count=anchor_count,
            extraction_timestamp=datetime.now().isoformat(),
        )

    def parse_lines_document(self, source: str, lines: Sequence[str]) -> ScheduleDocument:
        lines = list(lines)
        anchor_count = sum(1 for line in lines if self.detector.match_range(line))
        return ScheduleDocument(
            source=source,
            items=self.flat_parser.parse(lines),
            fragment_count=len(lines),
            anchor_count=anchor_count,
            extraction_timestamp=datetime.now().isoformat(),
        )

    def _parse_with_counts(self, fragments: Sequence[Fragment]) -> Tuple[List[ScheduleItem], int]:
        fragments = list(fragments)
        if any(f.box is None for f in fragments):
            lines = [f.text for f in fragments]
            anchor_count = sum(1 for line in lines if self.detector.match_range(line))
            return self.flat_parser.parse(lines), anchor_count
        return self._run_positioned(fragments)

    def _run_positioned(self, fragments: Iterable[Fragment]) -> Tuple[List[ScheduleItem], int]:
        rows: List[Row] = self.clusterer.cluster(fragments)
        anchors: List[Anchor] = self.detector.detect(rows)
        if not anchors:
            return [], 0

        row_weekdays = self.propagator.propagate(rows, {a.row_index for a in anchors})
        placeholder = self.config.placeholder_title

        items = []
        for position, anchor in enumerate(anchors):
            ctx = self.collector.collect(rows, anchors, position)
            fields = self.extractor.fill(f.text for f in ctx.all())
            title = self.extractor.resolve_title(anchor, ctx, placeholder)
            weekday = anchor.weekday_hint or row_weekdays[anchor.row_index]
            items.append(self.assembler.build(anchor.timeslot, title, fields, weekday))

        return self.assembler.finalize(items), len(anchors)
