"""
Shared data models for legacy sheet extraction
"""

from dataclasses import dataclass, field
from functools import cached_property

from legacy_sheet.shared.line_rules import NORDIC_NAME_RULES, NameRules
from legacy_sheet.shared.paragraphs import ParagraphLayout, layout_paragraphs


@dataclass(frozen=True)
class RawEntry:
    """One marker-delimited span of the input text"""
    number: str
    raw_span: str
    start: int  # offset of the marker in the input
    end: int    # offset of the next marker, or len(input)


@dataclass(frozen=True)
class Person:
    """A numbered person entry from a legacy sheet

    raw_text is the source of truth; the paragraph markup is recomputed from it.
    """
    number: str
    name: str = ""
    raw_text: str = ""
    escape_markup: bool = field(default=True, repr=False)
    rules: NameRules = field(default=NORDIC_NAME_RULES, repr=False, compare=False)

    @cached_property
    def layout(self) -> ParagraphLayout:
        return layout_paragraphs(self.raw_text, self.name, self.rules, self.escape_markup)

    @property
    def main_paragraph_markup(self) -> str:
        return self.layout.main_markup

    @property
    def sub_paragraphs(self) -> tuple[str, ...]:
        return self.layout.sub_paragraphs

    def to_dict(self) -> dict:
        return {
            'number': self.number,
            'name': self.name,
            'rawText': self.raw_text,
            'mainParagraphMarkup': self.main_paragraph_markup,
            'subParagraphs': list(self.sub_paragraphs),
        }


@dataclass(frozen=True)
class GenealogyDocument:
    """Result of one extraction run, replaced wholesale by the next one"""
    generation_title: str = ""
    persons: tuple[Person, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.persons

    @property
    def person_count(self) -> int:
        return len(self.persons)

    def to_dict(self) -> dict:
        return {
            'generationTitle': self.generation_title,
            'persons': [person.to_dict() for person in self.persons],
        }
