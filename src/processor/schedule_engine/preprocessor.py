"""Loading and cleanup of timetable photos before OCR."""

from pathlib import Path
from typing import List, Union

import cv2
import numpy as np
from PIL import Image, ImageOps


class DocumentPreprocessor:
    """Loads photos and PDFs as OCR-ready BGR images."""

    def __init__(self, max_dimension: int = 3000, denoise: bool = True):
        """
        Args:
            max_dimension: Longest side after resizing; phone photos are often larger
            denoise: Whether to run non-local-means denoising
        """
        self.supported_image_formats = {'.png', '.jpg', '.jpeg', '.bmp', '.tiff', '.tif'}
        self.max_dimension = max_dimension
        self.denoise = denoise

    def process(self, file_path: Union[str, Path]) -> List[np.ndarray]:
        """
        Load a document as a list of preprocessed images (one per page).

        Raises:
            ValueError: If the format is unsupported or the file cannot be read
        """
        file_path = Path(file_path)
        extension = file_path.suffix.lower()

        if extension in self.supported_image_formats:
            return [self._prepare(self._load_photo(file_path))]
        if extension == '.pdf':
            return [self._prepare(page) for page in self._render_pdf(file_path)]
        raise ValueError(f"Unsupported file format: {extension}")

    def _load_photo(self, file_path: Path) -> np.ndarray:
        try:
            with Image.open(file_path) as img:
                # Phone cameras store rotation in EXIF instead of rotating pixels.
                upright = ImageOps.exif_transpose(img).convert('RGB')
                rgb = np.array(upright)
        except (OSError, ValueError) as e:
            raise ValueError(f"Error loading image {file_path}: {e}")

        print(f"  → Loaded image: shape={rgb.shape}")
        return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)

    def _render_pdf(self, file_path: Path) -> List[np.ndarray]:
        try:
            from pdf2image import convert_from_path
        except ImportError:
            raise ImportError(
                "pdf2image is required for PDF processing. "
                "Install with: pip install pdf2image"
            )

        pages = convert_from_path(str(file_path), dpi=300, fmt='RGB')
        return [cv2.cvtColor(np.array(page), cv2.COLOR_RGB2BGR) for page in pages]

    def _prepare(self, image: np.ndarray) -> np.ndarray:
        """Resize, denoise and boost contrast (CLAHE on the L channel)."""
        image = self.resize_for_ocr(image, self.max_dimension)

        if self.denoise:
            image = cv2.fastNlMeansDenoisingColored(image, None, 10, 10, 7, 21)

        lab = cv2.cvtColor(image, cv2.COLOR_BGR2LAB)
        l, a, b = cv2.split(lab)
        clahe = cv2.createCLAHE(clipLimit=3.0, tileGridSize=(8, 8))
        enhanced = cv2.merge([clahe.apply(l), a, b])

        return cv2.cvtColor(enhanced, cv2.COLOR_LAB2BGR)

    @staticmethod
    def resize_for_ocr(image: np.ndarray, max_dimension: int = 3000) -> np.ndarray:
        """Shrink the image so its longest side is at most ``max_dimension``."""
        h, w = image.shape[:2]

        if max(h, w) > max_dimension:
            scale = max_dimension / max(h, w)
            return cv2.resize(image, (int(w * scale), int(h * scale)), interpolation=cv2.INTER_AREA)

        return image
