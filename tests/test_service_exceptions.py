"""
Tests for service layer exceptions
"""
import json
from unittest.mock import Mock

import pytest
import pytesseract
from PIL import UnidentifiedImageError

from legacy_sheet.services.exceptions import (
    ExternalServiceError,
    NotFoundError,
    ServiceError,
    StorageError,
    ValidationError,
    handle_service_exceptions,
)


class TestServiceExceptions:
    """Test service exception classes"""

    def test_inheritance(self):
        """Test that all exceptions inherit from ServiceError"""
        for error_class in (ValidationError, NotFoundError, ExternalServiceError, StorageError):
            assert isinstance(error_class("x"), ServiceError)

    def test_exception_chaining(self):
        original_error = ValueError("Original error")

        try:
            raise ValidationError("Validation failed") from original_error
        except ValidationError as e:
            assert str(e) == "Validation failed"
            assert e.__cause__ == original_error


class TestHandleServiceExceptions:
    """Test the exception-converting decorator"""

    def _wrapped(self, error, logger=None):
        @handle_service_exceptions(logger)
        def operation():
            raise error
        return operation

    def test_passes_return_value(self):
        @handle_service_exceptions()
        def operation(value):
            return value * 2

        assert operation(21) == 42

    def test_own_errors_reraised_unchanged(self):
        error = NotFoundError("missing")
        with pytest.raises(NotFoundError) as exc_info:
            self._wrapped(error)()
        assert exc_info.value is error

    @pytest.mark.parametrize('error, expected', [
        (json.JSONDecodeError("bad", "{", 0), ValidationError),
        (ValueError("bad value"), ValidationError),
        (KeyError("text"), ValidationError),
        (FileNotFoundError(2, "No such file", "state.json"), NotFoundError),
        (PermissionError("denied"), StorageError),
        (OSError("disk full"), StorageError),
        (pytesseract.TesseractError(1, "failed"), ExternalServiceError),
        (pytesseract.TesseractNotFoundError(), ExternalServiceError),
        (UnidentifiedImageError("not an image"), ExternalServiceError),
        (RuntimeError("boom"), ServiceError),
    ])
    def test_conversions(self, error, expected):
        """Test low-level errors become service errors with the cause chained"""
        with pytest.raises(expected) as exc_info:
            self._wrapped(error)()
        assert exc_info.value.__cause__ is error

    def test_logs_conversion(self):
        logger = Mock()
        with pytest.raises(ValidationError):
            self._wrapped(ValueError("bad"), logger)()
        logger.error.assert_called_once()
        assert "operation" in logger.error.call_args[0][0]
