"""
Parser for properties text.

Line format::

    # comment            (or ! comment; leading whitespace allowed)
    <blank>
    key=value            (or key:value; whitespace around both trimmed)
    key                  (no separator: empty value)

The separator is the first ``=`` or ``:`` *after* the first
non-whitespace character, so a key can only contain one of them as its
very first character.
"""
from __future__ import annotations

import logging
import re

from core.document import PropertiesDocument
from core.line_kind import LineKind
from core.document_line import (
    COMMENT_LEADERS,
    DEFAULT_SEPARATOR,
    SEPARATORS,
    BlankLine,
    CommentLine,
    DocumentLine,
    PropertyLine,
    split_lines,
)

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile("[" + re.escape("".join(SEPARATORS)) + "]")


def is_comment(text: str) -> bool:
    return text.lstrip().startswith(COMMENT_LEADERS)


def is_empty(text: str) -> bool:
    return not text.strip()


def parse_line(text: str) -> DocumentLine:
    """
    Classify a single line (without its newline) into a DocumentLine.

    Never raises: anything that is neither blank nor a comment is a
    property, possibly with an empty value.
    """
    content = text.lstrip()
    if not content:
        return BlankLine()

    if content[0] in COMMENT_LEADERS:
        return CommentLine(raw_text=text)

    start = len(text) - len(content)
    match = _SEPARATOR_RE.search(text, start + 1)
    if match is None:
        return PropertyLine(key=text[start:].rstrip(), separator=DEFAULT_SEPARATOR)

    sep_pos = match.start()
    return PropertyLine(
        key=text[start:sep_pos].rstrip(),
        value=text[sep_pos + 1:].strip(),
        separator=text[sep_pos],
    )


def is_writable_key(key: str) -> bool:
    """True if ``key=...`` would parse back to the same key."""
    if "\n" in key or "\r" in key:
        return False
    line = parse_line(key + DEFAULT_SEPARATOR)
    return line.kind is LineKind.PROPERTY and line.key == key


def parse(text: str, file_path: str = "") -> PropertiesDocument:
    """Parse a whole properties text into a new PropertiesDocument."""
    doc = PropertiesDocument(
        (parse_line(line) for line in split_lines(text)),
        file_path=file_path,
    )
    logger.debug("Parsed %d lines (%d properties)", len(doc), doc.property_count)
    return doc

