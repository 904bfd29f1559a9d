"""OCR extraction using PaddleOCR."""

from functools import cmp_to_key
from typing import Any, List, Optional, Sequence

import numpy as np

from .models import BoundingBox, Fragment
from .utils import sanitize_text

# Fragments whose centres differ by less than this are ordered left-to-right.
READING_ORDER_BAND = 0.01


def _reading_order(a: Fragment, b: Fragment) -> int:
    if abs(a.box.mid_y - b.box.mid_y) > READING_ORDER_BAND:
        return -1 if a.box.mid_y > b.box.mid_y else 1
    if a.box.min_x != b.box.min_x:
        return -1 if a.box.min_x < b.box.min_x else 1
    return 0


def _as_polygon(raw: Any) -> Optional[List[List[float]]]:
    """Accept a 4-point polygon or an [x1, y1, x2, y2] rectangle."""
    if raw is None:
        return None
    try:
        points = [[float(p[0]), float(p[1])] for p in raw]
        if len(points) >= 3:
            return points
    except (TypeError, IndexError):
        pass
    try:
        x1, y1, x2, y2 = (float(v) for v in raw)
        return [[x1, y1], [x2, y1], [x2, y2], [x1, y2]]
    except (TypeError, ValueError):
        return None


class OCRExtractor:
    """Turns an image into positioned text fragments with PaddleOCR."""

    def __init__(self, use_gpu: bool = False, lang: str = 'en', engine: Any = None):
        """
        Initialize OCR extractor.

        Args:
            use_gpu: Run PaddleOCR on the GPU (requires paddlepaddle-gpu)
            lang: PaddleOCR language code ('en', 'ru', 'german', ...)
            engine: Ready OCR engine exposing ``ocr(image)``; built from PaddleOCR when omitted
        """
        if engine is None:
            from paddleocr import PaddleOCR

            engine = PaddleOCR(
                use_angle_cls=True,  # photos are often slightly rotated
                lang=lang,
                device='gpu' if use_gpu else 'cpu',
                det_db_box_thresh=0.3,  # faint print on photographed pages
                det_db_unclip_ratio=2.0,
            )
        self.ocr = engine
        self.use_gpu = use_gpu

    def extract_fragments(self, image: np.ndarray) -> List[Fragment]:
        """
        Recognize text lines in an image.

        Args:
            image: Input image as numpy array (BGR format from OpenCV)

        Returns:
            Fragments with normalized bottom-left boxes, top-to-bottom then
            left-to-right; empty on an unusable image
        """
        if image is None or not isinstance(image, np.ndarray) or image.size == 0:
            print("    Warning: Received an empty or invalid image")
            return []

        result = self.ocr.ocr(image)
        if not result:
            print("    Warning: PaddleOCR returned no results")
            return []

        h, w = image.shape[:2]
        fragments = []
        for text, score, raw_box in self._iter_results(result):
            text = sanitize_text(str(text))
            if not text:
                continue
            polygon = _as_polygon(raw_box)
            if polygon is None:
                print(f"    Warning: skipping '{text}' without a bounding box")
                continue
            fragments.append(Fragment(
                text=text,
                box=BoundingBox.from_polygon(polygon, w, h),
                confidence=float(score),
            ))

        fragments.sort(key=cmp_to_key(_reading_order))
        return fragments

    @staticmethod
    def _iter_results(result: Sequence[Any]):
        """
        Yield (text, score, box) from either PaddleOCR output layout.

        Newer pipelines return ``[{'rec_texts': ..., 'rec_scores': ..., 'rec_polys': ...}]``;
        older ones return ``[[ [box], (text, score) ], ...]`` per page.
        """
        first = result[0]
        if first is None:
            return

        if isinstance(first, dict):
            texts = first.get('rec_texts', []) or []
            scores = first.get('rec_scores', []) or []
            polys = first.get('rec_polys')
            if polys is None:
                polys = first.get('rec_boxes')
            for idx, text in enumerate(texts):
                score = scores[idx] if idx < len(scores) else 0.0
                box = polys[idx] if polys is not None and idx < len(polys) else None
                yield text, score, box
            return

        lines = first if isinstance(first, list) else result
        for line in lines or []:
            try:
                box, (text, score) = line[0], line[1]
            except (IndexError, TypeError, ValueError) as e:
                print(f"    Warning: Skipping malformed OCR result: {e}")
                continue
            yield text, score, box

    @staticmethod
    def calculate_confidence_score(fragments: List[Fragment]) -> float:
        """
        Calculate average confidence score for extracted fragments.

        Returns:
            Average confidence score (0-1)
        """
        if not fragments:
            return 0.0

        return sum(f.confidence for f in fragments) / len(fragments)
