"""Grouping of OCR fragments into visual rows."""

from typing import Iterable, List, Optional

from .config import ParserConfig
from .models import Fragment, Row


class RowClusterer:
    """Greedy vertical clustering of fragments into rows."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()

    def cluster(self, fragments: Iterable[Fragment]) -> List[Row]:
        """
        Group fragments into rows based on vertical centre.

        Fragments are scanned top-to-bottom (then left-to-right); each one
        joins the first existing row whose seed centre lies within the
        tolerance, otherwise it opens a new row. Rows keep their creation
        order, which is top-to-bottom because the scan is.

        Args:
            fragments: Fragments with bounding boxes, in any order

        Returns:
            List of rows, each ordered left-to-right
        """
        ordered = sorted(
            (f for f in fragments if f.box is not None),
            key=lambda f: (-f.box.mid_y, f.box.min_x),
        )
        if not ordered:
            return []

        limit = self.config.row_tolerance + self.config.row_tolerance_epsilon
        rows: List[Row] = []
        centres: List[float] = []

        for fragment in ordered:
            y = fragment.box.mid_y
            for row, centre in zip(rows, centres):
                if abs(y - centre) <= limit:
                    row.fragments.append(fragment)
                    break
            else:
                rows.append(Row(index=len(rows), fragments=[fragment]))
                centres.append(y)

        for row in rows:
            row.fragments.sort(key=lambda f: f.box.min_x)

        return rows
