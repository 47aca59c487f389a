"""
Markup helpers for person paragraphs: emphasis, line breaks and hyperlinks
"""

import re

from markupsafe import escape


LINE_BREAK_TAG = '<br>'

ANCHOR_TAG_PATTERN = re.compile(r'<a\s[^>]*href\s*=', re.IGNORECASE)
ANCHOR_ELEMENT_PATTERN = re.compile(r'<a\s[^>]*href\s*=[^>]*>.*?</a\s*>', re.IGNORECASE | re.DOTALL)
MARKDOWN_LINK_PATTERN = re.compile(r'\[([^\[\]]+)\]\(([^()\s]+)\)')
URL_SCHEME_PATTERN = re.compile(r'^([a-zA-Z][a-zA-Z0-9+.\-]*):')
BR_TAG_PATTERN = re.compile(r'<br\s*/?>', re.IGNORECASE)
WHITESPACE_RUN_PATTERN = re.compile(r'\s+')

SAFE_URL_SCHEMES = frozenset({'http', 'https', 'mailto'})


def has_anchor_tag(fragment: str) -> bool:
    return ANCHOR_TAG_PATTERN.search(fragment) is not None


def is_safe_url(url: str) -> bool:
    """Relative URLs and http(s)/mailto links; javascript: and friends are refused"""
    match = URL_SCHEME_PATTERN.match(url.strip())
    return match is None or match.group(1).lower() in SAFE_URL_SCHEMES


def _anchor(match: re.Match) -> str:
    label, url = match.group(1), match.group(2)
    if not is_safe_url(url):
        return match.group(0)
    return f'<a href="{url}" target="_blank" rel="noopener noreferrer">{label}</a>'


def _escape_around_anchors(fragment: str) -> str:
    # Anchor elements are kept byte for byte; only the text between them is escaped
    parts = []
    position = 0
    for match in ANCHOR_ELEMENT_PATTERN.finditer(fragment):
        parts.append(str(escape(fragment[position:match.start()])))
        parts.append(match.group(0))
        position = match.end()
    parts.append(str(escape(fragment[position:])))
    return ''.join(parts)


def preserve_hyperlinks(fragment: str, escape_text: bool = True) -> str:
    """
    Prepare a prose fragment for emission as markup

    Literal anchor elements in the fragment are kept exactly as written and
    no markdown links are rewritten next to them. Otherwise every
    [label](url) link with a safe URL is rewritten into an anchor opening
    in a new tab. Unless escape_text is False, all text outside anchor
    elements is HTML-escaped first.

    Args:
        fragment: Plain prose, possibly containing markdown links
        escape_text: Escape markup-significant characters first

    Returns:
        Markup string
    """
    if not fragment:
        return ""

    if has_anchor_tag(fragment):
        return _escape_around_anchors(fragment) if escape_text else fragment

    text = str(escape(fragment)) if escape_text else fragment
    return MARKDOWN_LINK_PATTERN.sub(_anchor, text)


def emphasize(name: str, escape_text: bool = True) -> str:
    """Wrap a person's name in <strong>"""
    text = str(escape(name)) if escape_text else name
    return f'<strong>{text}</strong>'


def join_lines(fragments: list[str]) -> str:
    """Join already-rendered fragments with a markup line break"""
    return LINE_BREAK_TAG.join(fragments)


def flatten_block(lines: list[str]) -> str:
    """Flatten a block of lines to one line of text.

    Line breaks and <br> tags become spaces and whitespace runs collapse.
    """
    text = ' '.join(lines)
    text = BR_TAG_PATTERN.sub(' ', text)
    return WHITESPACE_RUN_PATTERN.sub(' ', text).strip()
