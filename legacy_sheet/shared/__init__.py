"""
Shared legacy sheet parsing utilities
"""

from .legacy_sheet_parser import (
    LegacySheetParser,
    MalformedInputError,
    extract_generation_title,
    parse_document,
    parse_entry,
    segment,
)
from .line_rules import NORDIC_NAME_RULES, NameRules
from .models import GenealogyDocument, Person, RawEntry


__all__ = [
    'LegacySheetParser', 'MalformedInputError',
    'segment', 'parse_entry', 'extract_generation_title', 'parse_document',
    'GenealogyDocument', 'Person', 'RawEntry',
    'NameRules', 'NORDIC_NAME_RULES',
]
