"""
Custom exceptions for service layer
"""

import functools
import json

import pytesseract
from PIL import UnidentifiedImageError


class ServiceError(Exception):
    """Base exception for service layer errors"""
    pass

class ValidationError(ServiceError):
    """Raised when input validation fails"""
    pass

class NotFoundError(ServiceError):
    """Raised when a requested resource (saved state, import file) is not found"""
    pass

class ExternalServiceError(ServiceError):
    """Raised when OCR (Tesseract) or image decoding fails"""
    pass

class StorageError(ServiceError):
    """Raised when reading or writing state files fails"""
    pass


def handle_service_exceptions(logger=None):
    """Decorator to convert low-level exceptions into service-specific exceptions"""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ServiceError:
                # Our own errors are already meaningful
                raise
            except json.JSONDecodeError as e:
                if logger:
                    logger.error(f"Invalid JSON in {func.__name__}: {e}")
                raise ValidationError(f"Invalid JSON: {e}") from e
            except pytesseract.TesseractNotFoundError as e:
                if logger:
                    logger.error(f"Tesseract not installed for {func.__name__}: {e}")
                raise ExternalServiceError("Tesseract is not installed or not on PATH") from e
            except pytesseract.TesseractError as e:
                if logger:
                    logger.error(f"Tesseract error in {func.__name__}: {e}")
                raise ExternalServiceError(f"OCR processing failed: {e}") from e
            except UnidentifiedImageError as e:
                if logger:
                    logger.error(f"Unreadable image in {func.__name__}: {e}")
                raise ExternalServiceError(f"Unsupported or corrupt image: {e}") from e
            except FileNotFoundError as e:
                if logger:
                    logger.error(f"Missing file in {func.__name__}: {e}")
                raise NotFoundError(f"File not found: {e.filename}") from e
            except OSError as e:
                if logger:
                    logger.error(f"File system error in {func.__name__}: {e}")
                raise StorageError(f"File system error: {e}") from e
            except ValueError as e:
                if logger:
                    logger.error(f"Validation error in {func.__name__}: {e}")
                raise ValidationError(f"Invalid input: {e}") from e
            except KeyError as e:
                if logger:
                    logger.error(f"Missing required data in {func.__name__}: {e}")
                raise ValidationError(f"Missing required field: {e}") from e
            except Exception as e:
                if logger:
                    logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
                raise ServiceError(f"Unexpected service error: {e}") from e
        return wrapper
    return decorator
