from enum import Enum


class LineKind(Enum):
    """
    Classification of a properties document line.
    """
    COMMENT = "comment"    # first non-blank character is '#' or '!'
    BLANK = "blank"        # empty or whitespace-only
    PROPERTY = "property"  # key/value pair, separated by '=' or ':'
