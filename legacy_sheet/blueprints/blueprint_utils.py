"""
Standardized service wiring and error handling for blueprint operations
"""
from functools import wraps

from flask import current_app, request

from legacy_sheet.services.exceptions import (
    ExternalServiceError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from legacy_sheet.services.extraction_service import ExtractionService
from legacy_sheet.services.ocr_service import OCRService
from legacy_sheet.services.state_service import StateService
from legacy_sheet.shared.api_response_formatter import APIResponseFormatter
from legacy_sheet.shared.legacy_sheet_parser import LegacySheetParser
from legacy_sheet.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.bmp', '.tif', '.tiff', '.webp'}


def get_state_service() -> StateService:
    return StateService(current_app.config['DATA_DIR'])


def get_extraction_service() -> ExtractionService:
    """Build an extraction service from the app configuration"""
    config = current_app.config
    return ExtractionService(
        parser=LegacySheetParser(escape_markup=config.get('ESCAPE_PROSE', True)),
        ocr_service=OCRService(
            language=config.get('OCR_LANGUAGE', 'eng'),
            tesseract_config=config.get('TESSERACT_CONFIG', '--oem 3 --psm 6'),
        ),
    )


def get_text_field() -> str | None:
    """'text' from a JSON body or form post"""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload.get('text')
    return request.form.get('text')


def status_code_for(error: ServiceError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ExternalServiceError):
        return 502
    return 500


def handle_api_errors(func):
    """Decorator turning service errors into JSON error responses"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ServiceError as e:
            status_code = status_code_for(e)
            if status_code >= 500:
                logger.error(f"Service error in {func.__name__}: {e}")
            else:
                logger.warning(f"{func.__name__} rejected request: {e}")
            return APIResponseFormatter.error(str(e), status_code=status_code)
    return wrapper
