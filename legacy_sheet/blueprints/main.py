"""
Main blueprint - renders the legacy sheet template
"""

from flask import Blueprint, render_template

from legacy_sheet.blueprints.blueprint_utils import get_extraction_service, get_text_field
from legacy_sheet.services.exceptions import ValidationError
from legacy_sheet.shared.logging_config import get_project_logger
from legacy_sheet.shared.models import GenealogyDocument


logger = get_project_logger(__name__)

main = Blueprint('main', __name__)


@main.route('/')
def index():
    """Empty legacy sheet"""
    return render_template('sheet.html', document=GenealogyDocument())


@main.route('/sheet', methods=['POST'])
def render_sheet():
    """Legacy sheet with the persons parsed from the posted text"""
    text = get_text_field() or ''
    try:
        document = get_extraction_service().extract_document(text)
    except ValidationError as e:
        logger.warning(f"Could not render sheet: {e}")
        return render_template('sheet.html', document=GenealogyDocument(), error=str(e)), 400

    return render_template('sheet.html', document=document)
