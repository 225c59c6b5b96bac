"""
DocumentLine — one record in a properties document.

Each line in a file becomes exactly one record.  The record type is a
closed union with one dataclass per :class:`LineKind`, so comment and
blank lines never carry unused key/value fields.

All three variants expose the same read-only ``kind`` / ``key`` /
``value`` view, which is what line visitors (``accept``) and the
serializer rely on:

    =============  ===========  =============================
    variant        key          value
    =============  ===========  =============================
    CommentLine    ``""``       raw text, leader included
    BlankLine      ``""``       ``""``
    PropertyLine   the key      the trimmed value
    =============  ===========  =============================
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from core.line_kind import LineKind

COMMENT_LEADERS = ("#", "!")
DEFAULT_COMMENT_LEADER = "#"
SEPARATORS = ("=", ":")
DEFAULT_SEPARATOR = "="


@dataclass(frozen=True, slots=True)
class CommentLine:
    """A comment line, kept verbatim for round-trip output."""
    raw_text: str = DEFAULT_COMMENT_LEADER

    kind: ClassVar[LineKind] = LineKind.COMMENT

    @property
    def key(self) -> str:
        return ""

    @property
    def value(self) -> str:
        return self.raw_text

    @property
    def leader(self) -> str:
        """The ``#`` or ``!`` that opens the comment."""
        return self.raw_text.lstrip()[:1]

    @property
    def text(self) -> str:
        """Comment content after the leader character."""
        return self.raw_text.lstrip()[1:]


@dataclass(frozen=True, slots=True)
class BlankLine:
    """An empty line.  Whitespace-only source lines are normalized to this."""

    kind: ClassVar[LineKind] = LineKind.BLANK

    @property
    def raw_text(self) -> str:
        return ""

    @property
    def key(self) -> str:
        return ""

    @property
    def value(self) -> str:
        return ""


@dataclass(slots=True)
class PropertyLine:
    """
    A ``key<separator>value`` line.

    Attributes:
        key:       Property name, trimmed on the right.  Unique among the
                   *indexed* properties of a document.
        value:     Trimmed value text.  Mutated in place by ``set``.
        separator: ``=`` or ``:`` exactly as found in the source, or
                   ``=`` for lines created programmatically and for
                   key-only lines.
    """
    key: str
    value: str = ""
    separator: str = DEFAULT_SEPARATOR

    kind: ClassVar[LineKind] = LineKind.PROPERTY

    def __post_init__(self):
        if self.separator not in SEPARATORS:
            raise ValueError(
                f"Invalid separator {self.separator!r}; expected one of {SEPARATORS}"
            )


DocumentLine = Union[CommentLine, BlankLine, PropertyLine]


def split_lines(text: str) -> list[str]:
    """
    Split *text* on ``\\n`` the way a line scanner does.

    A trailing ``\\r`` is dropped from every line and a final newline
    does not produce an extra empty line, so ``"a\\r\\nb\\n"`` gives
    ``["a", "b"]`` and ``""`` gives ``[]``.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
