"""
Case-convention helpers used to probe document keys for a field name.

``split_words`` understands snake_case, kebab-case, camelCase,
PascalCase and runs of capitals (``HTTPServer`` → ``HTTP``, ``Server``).
"""
from __future__ import annotations

import re

_SEPARATOR_RE = re.compile(r"[_\-\s]+")
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


def split_words(name: str) -> list[str]:
    words: list[str] = []
    for chunk in _SEPARATOR_RE.split(name):
        words.extend(_WORD_RE.findall(chunk))
    return words


def to_camel_lower(name: str) -> str:
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def to_camel_upper(name: str) -> str:
    return "".join(w.capitalize() for w in split_words(name))


def to_snake(name: str) -> str:
    return "_".join(w.lower() for w in split_words(name))


def to_snake_upper(name: str) -> str:
    return "_".join(w.upper() for w in split_words(name))


def to_kebab(name: str) -> str:
    return "-".join(w.lower() for w in split_words(name))


def to_kebab_upper(name: str) -> str:
    return "-".join(w.upper() for w in split_words(name))
