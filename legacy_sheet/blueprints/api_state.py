"""
Application state API blueprint - save and load appState.json
"""

from flask import Blueprint, jsonify, request

from legacy_sheet.blueprints.blueprint_utils import get_state_service, handle_api_errors
from legacy_sheet.services.exceptions import ValidationError
from legacy_sheet.shared.api_response_formatter import APIResponseFormatter
from legacy_sheet.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

api_state = Blueprint('api_state', __name__, url_prefix='/api')


@api_state.route('/save-state', methods=['POST'])
@handle_api_errors
def save_state():
    """Persist the editor state sent as a JSON object"""
    state = request.get_json(silent=True)
    if not isinstance(state, dict):
        raise ValidationError('Request body must be a JSON object')

    summary = get_state_service().save_state(state)
    return APIResponseFormatter.success(
        {'pages': summary.pages, 'savedAt': summary.saved_at},
        message='State saved',
    )


@api_state.route('/load-state')
@handle_api_errors
def load_state():
    """Return the saved editor state verbatim"""
    return jsonify(get_state_service().load_state())
