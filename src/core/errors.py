"""
Base error hierarchy for the properties document system.

Structural edits (``set`` / ``delete`` / ``comment`` / ``uncomment``)
never raise and typed accessors always fall back to a default, so the
errors below only come from loading input and from struct binding.
File-system failures are not wrapped: ``OSError`` reaches the caller
unchanged.
"""
from __future__ import annotations



class DocumentError(Exception):
    """Base class for all properties document errors."""


class DocumentLoadError(DocumentError):
    """Raised when source bytes cannot be decoded into text."""


class BindingError(DocumentError):
    """Raised when document values cannot be bound onto a dataclass."""
