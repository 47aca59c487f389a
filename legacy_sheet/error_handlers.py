"""
Shared error handlers for the Flask application
"""

from flask import jsonify, request

from legacy_sheet.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)


def _wants_json() -> bool:
    return request.is_json or request.path.startswith('/api/')


def register_error_handlers(app_or_blueprint):
    """Register error handlers for Flask app or blueprint"""

    @app_or_blueprint.errorhandler(404)
    def not_found_error(error):
        logger.warning(f"404 error: {request.url}")

        if _wants_json():
            return jsonify({'success': False, 'error': 'Resource not found'}), 404

        return "<h1>Not Found</h1><p>The requested page does not exist.</p>", 404

    @app_or_blueprint.errorhandler(405)
    def method_not_allowed_error(error):
        logger.warning(f"405 error: {request.method} {request.url}")

        if _wants_json():
            return jsonify({'success': False, 'error': 'Method not allowed'}), 405

        return "<h1>Method Not Allowed</h1>", 405

    @app_or_blueprint.errorhandler(413)
    def payload_too_large_error(error):
        logger.warning(f"413 error: {request.url}")

        if _wants_json():
            return jsonify({'success': False, 'error': 'Upload too large'}), 413

        return "<h1>Upload Too Large</h1>", 413

    @app_or_blueprint.errorhandler(500)
    def internal_error(error):
        logger.error(f"500 error: {request.url} - {str(error)}")

        if _wants_json():
            return jsonify({'success': False, 'error': 'Internal server error'}), 500

        return "<h1>Internal Server Error</h1><p>An unexpected error occurred.</p>", 500
