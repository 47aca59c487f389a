"""
Line classification rules for legacy sheet text

Each rule is a small named predicate so it can be tested and swapped on its own.
Name matching is driven by a NameRules value; NORDIC_NAME_RULES is the default
and covers the accented capitals found in Scandinavian family books.
"""

import re
from dataclasses import dataclass
from functools import lru_cache


# Marker rule: 1-4 digits, a period, whitespace.
MARKER_RULE = r'(\d{1,4})\.\s'
MARKER_LINE_PATTERN = re.compile(MARKER_RULE)

# \r alone also counts as a line break so old Mac line endings still match.
LINE_START = r'(?:^|(?<=\r))'

# Marker at the start of any line of a whole text
MARKER_PATTERN = re.compile(LINE_START + MARKER_RULE, re.MULTILINE)

# Marker at the start of a single (already isolated) entry span
LEADING_MARKER_PATTERN = re.compile(r'^\s*(\d{1,4})\.(?:\s+|$)')

LINE_BREAK_PATTERN = re.compile(r'\r\n|\r|\n')

GENERATION_TITLE_PATTERN = re.compile(LINE_START + r'[^\r\n]*Generation', re.IGNORECASE | re.MULTILINE)


@dataclass(frozen=True)
class NameRules:
    """Character classes that define a capitalized name word"""
    upper: str = 'A-Z'
    lower: str = 'a-z'
    joiners: str = "'-"

    @property
    def word_pattern(self) -> str:
        """Regex source for one capitalized word (Anna, O'Brien, Anna-Lisa)"""
        return f"[{self.upper}](?:[{self.lower}]|[{re.escape(self.joiners)}][{self.upper}]?)+"

    @property
    def name_run_pattern(self) -> re.Pattern:
        return _compile_name_run(self.word_pattern)


NORDIC_NAME_RULES = NameRules(upper='A-ZÅÄÖÜ', lower='a-zåäöü')


@lru_cache(maxsize=16)
def _compile_name_run(word: str) -> re.Pattern:
    # Optional markdown bold around the run: **Jane Doe** was born ...
    return re.compile(rf'^\s*(?P<bold>\*\*)?(?P<name>{word}(?: {word})*)(?(bold)(?:\*\*)?)')


@lru_cache(maxsize=256)
def _compile_marriage_pattern(first_token: str, word: str) -> re.Pattern:
    subject = re.escape(first_token) if first_token else word
    return re.compile(
        rf'^\s*(?:(?:he|she)\s+married|married|{subject}\s+married)\b',
        re.IGNORECASE,
    )


def is_blank_line(line: str) -> bool:
    """True for empty or whitespace-only lines"""
    return not line.strip()


def is_marker_line(line: str) -> bool:
    """True when the line opens a new numbered entry ("119. ...")"""
    return MARKER_LINE_PATTERN.match(line) is not None


def match_name_run(line: str, rules: NameRules = NORDIC_NAME_RULES) -> re.Match | None:
    """Match the leading run of capitalized words on a line.

    The returned match exposes the name as group 'name'; match.end() is the
    offset where the remaining prose begins (after any closing **).
    """
    return rules.name_run_pattern.match(line)


def is_capitalized_name_run(line: str, rules: NameRules = NORDIC_NAME_RULES) -> bool:
    return match_name_run(line, rules) is not None


def first_name_token(name: str) -> str:
    parts = name.split()
    return parts[0] if parts else ""


def is_marriage_indicator(line: str, name: str = "", rules: NameRules = NORDIC_NAME_RULES) -> bool:
    """True when the line starts marriage prose.

    Matches "<first name> married", "Married", "He married" or "She married"
    at line start, case-insensitively. Without a detected name any capitalized
    word may stand in for the first name.
    """
    pattern = _compile_marriage_pattern(first_name_token(name), rules.word_pattern)
    return pattern.match(line) is not None


def split_lines(text: str) -> list[str]:
    """Split on \\r\\n, \\r or \\n"""
    return LINE_BREAK_PATTERN.split(text)
