"""
Base service class providing common functionality for all services
"""
from legacy_sheet.shared.logging_config import get_project_logger


class BaseService:
    """Base class for all services providing a per-module logger"""

    def __init__(self):
        self.logger = get_project_logger(self.__class__.__module__)
