"""
Serializer for properties documents.

Property lines are rendered from their parsed fields; comment and blank
lines are written back from their raw text.  Every line, the last one
included, is terminated with ``\\n``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from core.document_line import DocumentLine
from core.line_kind import LineKind

if TYPE_CHECKING:
    from core.document import PropertiesDocument

LINE_TERMINATOR = "\n"


def serialize_line(line: DocumentLine) -> str:
    """Render one line without its terminator."""
    if line.kind is LineKind.PROPERTY:
        return f"{line.key}{line.separator}{line.value}"
    return line.raw_text


def serialize(document: PropertiesDocument) -> str:
    """Render *document* as properties text."""
    parts: list[str] = []

    def render(line: DocumentLine) -> None:
        parts.append(serialize_line(line))
        parts.append(LINE_TERMINATOR)

    document.accept(render)
    return "".join(parts)
