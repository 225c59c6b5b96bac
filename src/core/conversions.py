"""
Strict text → value conversions shared by typed accessors and binding.

Every function raises ``ValueError`` on input it does not accept; the
callers decide whether that becomes a default (accessors) or an error
(binding).
"""
from __future__ import annotations

import math
import re
from datetime import timedelta

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

TRUE_TOKENS = frozenset({"1", "t", "T", "true", "TRUE", "True"})
FALSE_TOKENS = frozenset({"0", "f", "F", "false", "FALSE", "False"})

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:"
    r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|inf(?:inity)?|nan"
    r")",
    re.IGNORECASE,
)

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART_RE = re.compile(r"([0-9]*\.?[0-9]*)(ns|us|µs|μs|ms|s|m|h)")


def parse_int64(text: str) -> int:
    """Signed decimal integer within the 64-bit range."""
    if not _SIGNED_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def parse_uint64(text: str) -> int:
    """Unsigned decimal integer within the 64-bit range (no sign allowed)."""
    if not _UNSIGNED_RE.fullmatch(text):
        raise ValueError(f"invalid unsigned integer: {text!r}")
    value = int(text)
    if value > UINT64_MAX:
        raise ValueError(f"unsigned integer out of range: {text!r}")
    return value


def parse_float(text: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f"invalid float: {text!r}")
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f"float out of range: {text!r}")
    return value


def parse_bool(text: str) -> bool:
    """Accept only the canonical true/false tokens; ``fALSE`` is rejected."""
    if text in TRUE_TOKENS:
        return True
    if text in FALSE_TOKENS:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def parse_loose_bool(text: str) -> bool:
    """Binding rule: ``true``/``yes``/``on``/``1`` in any case, else False."""
    return text.lower() in ("true", "yes", "on", "1")


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration such as ``300ms``, ``1h30m`` or ``-2.5s``.

    A bare ``0`` is accepted; any other number needs a unit.
    """
    body = text
    sign = 1
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration: {text!r}")

    seconds = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART_RE.match(body, pos)
        if not match or match.group(1) in ("", "."):
            raise ValueError(f"invalid duration: {text!r}")
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return timedelta(seconds=sign * seconds)
