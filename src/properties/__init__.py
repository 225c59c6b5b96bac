from properties import parser
from properties import serializer
from properties.parser import is_comment, is_empty, is_writable_key, parse, parse_line
from properties.serializer import serialize, serialize_line

__all__ = [
    "parser",
    "serializer",
    "is_comment",
    "is_empty",
    "is_writable_key",
    "parse",
    "parse_line",
    "serialize",
    "serialize_line",
]
