"""
Legacy sheet text parsing - OCR text to numbered person records
"""

from legacy_sheet.shared.line_rules import (
    GENERATION_TITLE_PATTERN,
    MARKER_PATTERN,
    NORDIC_NAME_RULES,
    NameRules,
    match_name_run,
)
from legacy_sheet.shared.logging_config import get_project_logger
from legacy_sheet.shared.models import GenealogyDocument, Person, RawEntry
from legacy_sheet.shared.paragraphs import content_lines, split_marker


logger = get_project_logger(__name__)


class MalformedInputError(ValueError):
    """Raised when the pipeline is handed something other than text"""
    pass


class LegacySheetParser:
    """Parser for numbered genealogy sheets ("119. Jane Doe was born ...")"""

    def __init__(self, rules: NameRules = NORDIC_NAME_RULES, escape_markup: bool = True):
        self.rules = rules
        self.escape_markup = escape_markup

    @staticmethod
    def _require_text(text) -> str:
        if text is None:
            raise MalformedInputError("Expected text to parse, got None")
        if not isinstance(text, str):
            raise MalformedInputError(f"Expected text to parse, got {type(text).__name__}")
        return text

    def segment(self, text: str) -> list[RawEntry]:
        """
        Split text into marker-delimited entries

        A marker is 1-4 digits, a period and whitespace at the start of a line.
        Each span runs from its marker up to the next marker (or end of text)
        and is trimmed. No markers means no entries.

        Args:
            text: Raw OCR text

        Returns:
            Entries in order of appearance
        """
        text = self._require_text(text)
        matches = list(MARKER_PATTERN.finditer(text))

        entries = []
        for index, match in enumerate(matches):
            start = match.start()
            end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
            entries.append(RawEntry(
                number=match.group(1),
                raw_span=text[start:end].strip(),
                start=start,
                end=end,
            ))

        logger.debug(f"Segmented {len(text)} chars into {len(entries)} entries")
        return entries

    def detect_name(self, line: str) -> str:
        """Leading capitalized-word run of a line, or "" when there is none"""
        match = match_name_run(line, self.rules)
        return match.group('name') if match else ""

    def parse_entry(self, raw_span: str) -> Person:
        """
        Parse one entry span into a Person

        Name detection failures are not errors; the person is returned
        without a name and the first line is kept as plain prose.
        """
        raw_span = self._require_text(raw_span)
        number, body = split_marker(raw_span)
        lines = content_lines(body)

        name = self.detect_name(lines[0]) if lines else ""
        if not name:
            logger.debug(f"No name found for entry {number or '?'}")

        return Person(
            number=number,
            name=name,
            raw_text=raw_span,
            escape_markup=self.escape_markup,
            rules=self.rules,
        )

    def extract_generation_title(self, text: str) -> str:
        """First line ending in "Generation" (any case), trimmed; "" if absent"""
        text = self._require_text(text)
        match = GENERATION_TITLE_PATTERN.search(text)
        return match.group(0).strip() if match else ""

    def parse_document(self, text: str) -> GenealogyDocument:
        """
        Run the full pipeline over a text blob

        Args:
            text: Raw OCR (or typed) text

        Returns:
            GenealogyDocument with the generation title and persons in source order

        Raises:
            MalformedInputError: If text is not a string
        """
        text = self._require_text(text)
        generation_title = self.extract_generation_title(text)
        persons = tuple(self.parse_entry(entry.raw_span) for entry in self.segment(text))

        logger.info(f"Parsed {len(persons)} persons"
                    + (f" ({generation_title})" if generation_title else ""))
        return GenealogyDocument(generation_title=generation_title, persons=persons)


default_parser = LegacySheetParser()


def segment(text: str) -> list[RawEntry]:
    return default_parser.segment(text)


def parse_entry(raw_span: str) -> Person:
    return default_parser.parse_entry(raw_span)


def extract_generation_title(text: str) -> str:
    return default_parser.extract_generation_title(text)


def parse_document(text: str) -> GenealogyDocument:
    return default_parser.parse_document(text)
