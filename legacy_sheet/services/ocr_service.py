"""
OCR service - turns an uploaded or pasted sheet image into text with Tesseract
"""
from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import pytesseract
from PIL import Image, ImageOps

from legacy_sheet.services.base_service import BaseService
from legacy_sheet.services.exceptions import ExternalServiceError, ValidationError, handle_service_exceptions
from legacy_sheet.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

PHASE_LOADING_LANGUAGE = 'loading language model'
PHASE_INITIALIZING = 'initializing api'
PHASE_RECOGNIZING = 'recognizing text'
PHASE_DONE = 'done'

ProgressCallback = Callable[[dict], None]


class OCRService(BaseService):
    """Black-box OCR: image in, text out, progress reported through a callback"""

    def __init__(self, language: str = 'eng', tesseract_config: str = '--oem 3 --psm 6'):
        super().__init__()
        self.language = language
        self.tesseract_config = tesseract_config

    @staticmethod
    def _report(progress_callback: ProgressCallback | None, status: str, progress: float) -> None:
        if progress_callback:
            progress_callback({'status': status, 'progress': progress})

    def load_image(self, image) -> Image.Image:
        """Open a path, bytes, file-like object or PIL image"""
        if isinstance(image, Image.Image):
            return image
        if isinstance(image, (bytes, bytearray)):
            if not image:
                raise ValidationError("Image data is empty")
            opened = Image.open(BytesIO(image))
        elif isinstance(image, (str, Path)):
            opened = Image.open(Path(image))
        elif hasattr(image, 'read'):
            opened = Image.open(image)
        else:
            raise ValidationError(f"Unsupported image input: {type(image).__name__}")

        opened.load()
        return opened

    def check_language(self) -> None:
        """Make sure the configured Tesseract language data is installed"""
        available = pytesseract.get_languages(config='')
        if self.language not in available:
            raise ExternalServiceError(
                f"Tesseract language '{self.language}' is not installed "
                f"(available: {', '.join(sorted(available)) or 'none'})"
            )

    @staticmethod
    def prepare_image(image: Image.Image) -> Image.Image:
        """Upright, grayscale, autocontrasted copy for better recognition"""
        image = ImageOps.exif_transpose(image)
        image = ImageOps.grayscale(image)
        return ImageOps.autocontrast(image)

    @handle_service_exceptions(logger)
    def recognize(self, image, progress_callback: ProgressCallback | None = None) -> str:
        """
        Run OCR over an image

        Args:
            image: Path, bytes, file-like object or PIL image
            progress_callback: Receives {'status': phase, 'progress': 0..1}

        Returns:
            Recognized text (stripped)
        """
        self._report(progress_callback, PHASE_LOADING_LANGUAGE, 0.0)
        self.check_language()

        self._report(progress_callback, PHASE_INITIALIZING, 0.1)
        prepared = self.prepare_image(self.load_image(image))

        self._report(progress_callback, PHASE_RECOGNIZING, 0.2)
        text = pytesseract.image_to_string(prepared, lang=self.language, config=self.tesseract_config)
        self._report(progress_callback, PHASE_RECOGNIZING, 1.0)

        text = text.strip()
        self.logger.info(f"OCR recognized {len(text)} chars ({prepared.width}x{prepared.height} image)")
        self._report(progress_callback, PHASE_DONE, 1.0)
        return text
