"""Collection of the fragments surrounding each anchor."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .anchors import AnchorDetector
from .config import ParserConfig
from .models import Anchor, Fragment, Row


def _unique(fragments: Iterable[Fragment]) -> List[Fragment]:
    seen = set()
    out = []
    for f in fragments:
        if f not in seen:
            seen.add(f)
            out.append(f)
    return out


@dataclass
class AnchorContext:
    """Fragments near one anchor, split by where they sit relative to it."""
    above: List[Fragment] = field(default_factory=list)
    same_row_right: List[Fragment] = field(default_factory=list)
    below: List[Fragment] = field(default_factory=list)

    def all(self) -> List[Fragment]:
        return self.above + self.same_row_right + self.below


class ContextCollector:
    """Gathers above / same-row-right / below fragments, bounded by neighbouring anchors."""

    def __init__(self, detector: AnchorDetector, config: Optional[ParserConfig] = None):
        self.detector = detector
        self.config = config or ParserConfig()

    def collect(self, rows: List[Row], anchors: List[Anchor], position: int) -> AnchorContext:
        """
        Build the context window of ``anchors[position]``.

        Args:
            rows: All rows of the page
            anchors: Anchors in (row, x) order
            position: Index of the anchor to collect for

        Returns:
            AnchorContext with each list deduplicated in first-seen order
        """
        anchor = anchors[position]
        r = anchor.row_index
        ctx = AnchorContext()

        source = anchor.fragment
        right_edge = source.box.max_x if source.box is not None else 0.0
        eps = self.config.right_edge_epsilon
        ctx.same_row_right = _unique(
            f for f in rows[r].fragments
            if f != source and f.box is not None and f.box.min_x >= right_edge - eps
        )

        above = []
        for i in range(r - 1, max(-1, r - 1 - self.config.above_lookback), -1):
            if self.detector.row_has_anchor_pattern(rows[i]):
                break
            above.extend(rows[i].fragments)
        ctx.above = _unique(above)

        if position + 1 < len(anchors):
            next_row = anchors[position + 1].row_index
        else:
            next_row = len(rows)
        stop = min(next_row, r + 1 + self.config.below_lookahead, len(rows))

        below = []
        for i in range(r + 1, stop):
            if self.detector.row_has_anchor_pattern(rows[i]):
                break
            below.extend(rows[i].fragments)
        ctx.below = _unique(below)

        return ctx
