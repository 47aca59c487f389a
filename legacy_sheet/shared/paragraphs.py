"""
Paragraph layout for a single person entry

An entry body is walked line by line through a small state machine:

    SCANNING_MAIN -> (blank | marriage line) -> BETWEEN_PARAGRAPHS
    BETWEEN_PARAGRAPHS -> (non-blank) -> ACCUMULATING_SUBPARAGRAPH
    ACCUMULATING_SUBPARAGRAPH -> (blank) -> BETWEEN_PARAGRAPHS
    any state -> (input exhausted) -> END

A marriage line ends the main paragraph and opens the next sub-paragraph.
"""

from dataclasses import dataclass
from enum import Enum

from legacy_sheet.shared.line_rules import (
    LEADING_MARKER_PATTERN,
    NORDIC_NAME_RULES,
    NameRules,
    is_blank_line,
    is_marriage_indicator,
    match_name_run,
    split_lines,
)
from legacy_sheet.shared.markup import emphasize, flatten_block, join_lines, preserve_hyperlinks


class ParagraphState(Enum):
    SCANNING_MAIN = 'scanning_main'
    BETWEEN_PARAGRAPHS = 'between_paragraphs'
    ACCUMULATING_SUBPARAGRAPH = 'accumulating_subparagraph'
    END = 'end'


@dataclass(frozen=True)
class ParagraphLayout:
    """Main paragraph markup plus flattened sub-paragraphs"""
    main_markup: str = ""
    sub_paragraphs: tuple[str, ...] = ()


def split_marker(raw_span: str) -> tuple[str, str]:
    """Split "119. text" into ("119", "text"); no marker gives ("", raw_span)"""
    match = LEADING_MARKER_PATTERN.match(raw_span)
    if not match:
        return "", raw_span
    return match.group(1), raw_span[match.end():]


def content_lines(body: str) -> list[str]:
    """Lines of an entry body with leading blank lines dropped"""
    lines = split_lines(body)
    start = 0
    while start < len(lines) and is_blank_line(lines[start]):
        start += 1
    return lines[start:]


def render_first_line(line: str, name: str, rules: NameRules = NORDIC_NAME_RULES,
                      escape_text: bool = True) -> str:
    """Render the opening line with the detected name emphasized"""
    match = match_name_run(line, rules) if name else None
    if match is None or match.group('name') != name:
        return preserve_hyperlinks(line.strip(), escape_text)

    remainder = line[match.end():].rstrip()
    return emphasize(name, escape_text) + preserve_hyperlinks(remainder, escape_text)


def layout_paragraphs(raw_text: str, name: str = "", rules: NameRules = NORDIC_NAME_RULES,
                      escape_text: bool = True) -> ParagraphLayout:
    """
    Build the main paragraph and sub-paragraphs of one entry

    Args:
        raw_text: Verbatim entry span, marker included
        name: Detected display name ("" when none)
        rules: Name character classes used for marriage detection
        escape_text: Escape prose before hyperlink rewriting

    Returns:
        ParagraphLayout derived purely from the arguments
    """
    _, body = split_marker(raw_text)
    lines = content_lines(body)
    if not lines:
        return ParagraphLayout()

    main_fragments = [render_first_line(lines[0], name, rules, escape_text)]
    sub_paragraphs = []
    block = []

    def flush_block():
        text = flatten_block(block)
        if text:
            sub_paragraphs.append(preserve_hyperlinks(text, escape_text))
        block.clear()

    state = ParagraphState.SCANNING_MAIN
    cursor = 1

    while state is not ParagraphState.END:
        if cursor >= len(lines):
            flush_block()
            state = ParagraphState.END
            continue

        line = lines[cursor]

        if state is ParagraphState.SCANNING_MAIN:
            if is_blank_line(line):
                state = ParagraphState.BETWEEN_PARAGRAPHS
                cursor += 1
            elif is_marriage_indicator(line, name, rules):
                # Not consumed here; it opens the next sub-paragraph
                state = ParagraphState.ACCUMULATING_SUBPARAGRAPH
            else:
                main_fragments.append(preserve_hyperlinks(line.strip(), escape_text))
                cursor += 1

        elif state is ParagraphState.BETWEEN_PARAGRAPHS:
            if is_blank_line(line):
                cursor += 1
            else:
                state = ParagraphState.ACCUMULATING_SUBPARAGRAPH

        elif state is ParagraphState.ACCUMULATING_SUBPARAGRAPH:
            if is_blank_line(line):
                flush_block()
                state = ParagraphState.BETWEEN_PARAGRAPHS
            else:
                block.append(line)
            cursor += 1

    return ParagraphLayout(
        main_markup=join_lines(main_fragments),
        sub_paragraphs=tuple(sub_paragraphs),
    )
