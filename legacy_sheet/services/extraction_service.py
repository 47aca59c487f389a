"""
Extraction service - runs the legacy sheet parser over typed or OCR'd text
"""
from typing import NamedTuple

from legacy_sheet.services.base_service import BaseService
from legacy_sheet.services.exceptions import ValidationError, handle_service_exceptions
from legacy_sheet.services.ocr_service import OCRService, ProgressCallback
from legacy_sheet.shared.legacy_sheet_parser import LegacySheetParser, MalformedInputError
from legacy_sheet.shared.logging_config import get_project_logger
from legacy_sheet.shared.models import GenealogyDocument


logger = get_project_logger(__name__)


class ExtractionResult(NamedTuple):
    """Recognized text together with the document parsed from it"""
    text: str
    document: GenealogyDocument


class ExtractionService(BaseService):
    """Service for turning text (or an image of text) into a GenealogyDocument"""

    def __init__(self, parser: LegacySheetParser | None = None, ocr_service: OCRService | None = None):
        super().__init__()
        self.parser = parser or LegacySheetParser()
        self.ocr_service = ocr_service or OCRService()

    @handle_service_exceptions(logger)
    def extract_document(self, text) -> GenealogyDocument:
        """
        Parse text into a document

        An empty document is a valid outcome (no numbered entries found).

        Raises:
            ValidationError: If text is not a string
        """
        try:
            document = self.parser.parse_document(text)
        except MalformedInputError as e:
            raise ValidationError(str(e)) from e

        if document.is_empty:
            self.logger.warning(f"No numbered entries found in {len(text)} chars of text")
        else:
            self.logger.info(f"Extracted {document.person_count} persons"
                             f"{' for ' + document.generation_title if document.generation_title else ''}")
        return document

    def extract_from_image(self, image, progress_callback: ProgressCallback | None = None) -> ExtractionResult:
        """OCR an image, then parse the recognized text"""
        text = self.ocr_service.recognize(image, progress_callback)
        return ExtractionResult(text=text, document=self.extract_document(text))
