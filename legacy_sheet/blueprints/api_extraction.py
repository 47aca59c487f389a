"""
Extraction API blueprint - parse text or OCR an image into person records
"""
from pathlib import Path

from flask import Blueprint, request

from legacy_sheet.blueprints.blueprint_utils import (
    ALLOWED_IMAGE_EXTENSIONS,
    get_extraction_service,
    get_text_field,
    handle_api_errors,
)
from legacy_sheet.services.exceptions import ValidationError
from legacy_sheet.shared.api_response_formatter import APIResponseFormatter
from legacy_sheet.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

api_extraction = Blueprint('api_extraction', __name__, url_prefix='/api')


def _extraction_message(document) -> str:
    if document.is_empty:
        return 'No numbered entries found'
    return f'Extracted {document.person_count} persons'


@api_extraction.route('/parse', methods=['POST'])
@handle_api_errors
def parse_text():
    """Parse posted text into a GenealogyDocument"""
    text = get_text_field()
    if text is None:
        raise ValidationError("Missing required field: text")

    document = get_extraction_service().extract_document(text)
    return APIResponseFormatter.document(document, message=_extraction_message(document))


@api_extraction.route('/ocr', methods=['POST'])
@handle_api_errors
def ocr_image():
    """OCR an uploaded image, then parse the recognized text"""
    upload = request.files.get('image')
    if upload is None or upload.filename == '':
        raise ValidationError('No image uploaded')

    if Path(upload.filename).suffix.lower() not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError(f"File {upload.filename} is not a supported image")

    phases = []

    def progress_callback(data):
        phases.append(data['status'])
        logger.debug(f"OCR {upload.filename}: {data['status']} ({data['progress']:.0%})")

    result = get_extraction_service().extract_from_image(upload.read(), progress_callback)
    return APIResponseFormatter.document(
        result.document,
        message=_extraction_message(result.document),
        text=result.text,
        phases=phases,
    )
