from core.line_kind import LineKind
from core.document_line import (
    BlankLine,
    CommentLine,
    DocumentLine,
    PropertyLine,
    COMMENT_LEADERS,
    DEFAULT_COMMENT_LEADER,
    DEFAULT_SEPARATOR,
    SEPARATORS,
    split_lines,
)
from core.document import Handle, PropertiesDocument
from core.diff import ChangeType, DiffEvent, diff, diff_events
from core.errors import BindingError, DocumentError, DocumentLoadError
from core.binding import populate

__all__ = [
    "LineKind",
    "BlankLine",
    "CommentLine",
    "DocumentLine",
    "PropertyLine",
    "COMMENT_LEADERS",
    "DEFAULT_COMMENT_LEADER",
    "DEFAULT_SEPARATOR",
    "SEPARATORS",
    "split_lines",
    "Handle",
    "PropertiesDocument",
    "ChangeType",
    "DiffEvent",
    "diff",
    "diff_events",
    "BindingError",
    "DocumentError",
    "DocumentLoadError",
    "populate",
]
