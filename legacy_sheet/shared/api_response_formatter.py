"""
API response formatting utilities for consistent JSON responses across blueprints
"""

from typing import Any

from flask import jsonify


class APIResponseFormatter:
    """Utility class for formatting consistent API responses"""

    @staticmethod
    def success(data: Any = None, message: str = "", status_code: int = 200) -> tuple:
        """Format a successful API response"""
        response = {
            'success': True,
            'message': message
        }

        if data is not None:
            if isinstance(data, dict):
                response.update(data)
            else:
                response['data'] = data

        return jsonify(response), status_code

    @staticmethod
    def error(error_message: str, status_code: int = 400, details: dict | None = None) -> tuple:
        """Format an error API response"""
        response = {
            'success': False,
            'error': error_message
        }

        if details:
            response['details'] = details

        return jsonify(response), status_code

    @staticmethod
    def document(document, message: str = "", **extra) -> tuple:
        """Format a parsed GenealogyDocument"""
        return APIResponseFormatter.success({
            'document': document.to_dict(),
            'person_count': document.person_count,
            **extra,
        }, message=message)
