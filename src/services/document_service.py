"""
DocumentService — the bridge between the API layer and the core domain.

Manages:
- Open documents (keyed by a doc_id string)
- Keyed edits: set / delete / comment / uncomment a property
- Diffs between any two open documents
- Save / export back to properties text

Every public method returns JSON-friendly values (dicts, lists, str) so
the route layer can hand them straight to the client.  Unknown doc_ids
and unknown keys raise ``KeyError``.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Optional

from core import PropertiesDocument, diff_events
from core.document_line import DocumentLine
from infrastructure import load_document, load_string, save_document
from properties.parser import is_writable_key
from properties.serializer import serialize_line

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Facade that the API layer calls. One instance per application.

    Args:
        include_same: Default diff policy; when ``True`` unchanged keys
                      are reported as ``"same"`` events.
    """

    def __init__(self, include_same: bool = True):
        self._include_same = include_same
        self._documents: dict[str, PropertiesDocument] = {}

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def new(self, doc_id: str, text: str = "") -> dict:
        """Create an in-memory document from *text* (empty by default)."""
        return self.load_text(doc_id, text)

    def load(self, doc_id: str, file_path: str) -> dict:
        """Load a file into memory and return a summary."""
        logger.info("Loading document %s from %s", doc_id, file_path)
        doc = load_document(file_path)
        self._documents[doc_id] = doc
        logger.info("Loaded document %s: %d lines, %d properties",
                    doc_id, len(doc), doc.property_count)
        return self._document_summary(doc_id, doc)

    def load_text(self, doc_id: str, text: str) -> dict:
        doc = load_string(text)
        self._documents[doc_id] = doc
        logger.info("Parsed document %s: %d lines", doc_id, len(doc))
        return self._document_summary(doc_id, doc)

    def get_document(self, doc_id: str) -> PropertiesDocument:
        return self._documents[doc_id]

    def list_documents(self) -> list[dict]:
        return [
            self._document_summary(did, doc)
            for did, doc in self._documents.items()
        ]

    def close_document(self, doc_id: str) -> None:
        """Remove a document from memory.  Raises KeyError if not open."""
        del self._documents[doc_id]
        logger.info("Closed document %s", doc_id)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get_lines(
        self, doc_id: str, *, offset: int = 0, limit: Optional[int] = None,
    ) -> list[dict]:
        """Return lines in a document as JSON-friendly dicts.

        Args:
            offset: 0-based start position (default 0).
            limit:  Maximum number of lines to return.  ``None`` returns all.
        """
        doc = self._documents[doc_id]
        lines = doc.lines[offset : offset + limit if limit is not None else None]
        return [
            self._serialize_line(offset + i, line)
            for i, line in enumerate(lines)
        ]

    def get_properties(self, doc_id: str) -> dict[str, str]:
        return self._documents[doc_id].to_dict()

    def get_property(self, doc_id: str, key: str) -> dict:
        value = self._documents[doc_id].must_get(key)
        return {"key": key, "value": value}

    # ------------------------------------------------------------------
    # Keyed edits
    # ------------------------------------------------------------------

    def set_property(self, doc_id: str, key: str, value: str) -> dict:
        """Update or append *key*.

        Raises ValueError for a key that would not read back as itself
        (separators, comment leaders, edge whitespace or line breaks), and
        for a value containing a line break.
        """
        doc = self._documents[doc_id]
        if not is_writable_key(key):
            raise ValueError(f"Invalid property key: {key!r}")
        if "\n" in value or "\r" in value:
            raise ValueError(f"Property value for {key!r} contains a line break")
        created = key not in doc
        doc.set(key, value)
        logger.info("%s %r in doc=%s", "Added" if created else "Updated", key, doc_id)
        return {"key": key, "value": value, "created": created}

    def delete_property(self, doc_id: str, key: str) -> dict:
        """Delete *key* and its attached comments.  Raises KeyError if absent."""
        doc = self._documents[doc_id]
        if not doc.delete(key):
            raise KeyError(key)
        logger.info("Deleted %r from doc=%s", key, doc_id)
        return self._document_summary(doc_id, doc)

    def comment_property(self, doc_id: str, key: str, text: str = "") -> dict:
        doc = self._documents[doc_id]
        if not doc.comment(key, text):
            raise KeyError(key)
        logger.info("Commented %r in doc=%s", key, doc_id)
        return self._document_summary(doc_id, doc)

    def uncomment_property(self, doc_id: str, key: str) -> dict:
        doc = self._documents[doc_id]
        if not doc.uncomment(key):
            raise KeyError(key)
        logger.info("Uncommented %r in doc=%s", key, doc_id)
        return self._document_summary(doc_id, doc)

    # ------------------------------------------------------------------
    # Diff
    # ------------------------------------------------------------------

    def diff(
        self, left_id: str, right_id: str, include_same: Optional[bool] = None,
    ) -> list[dict]:
        """Compare two open documents; see :func:`core.diff.diff` for ordering."""
        left = self._documents[left_id]
        right = self._documents[right_id]
        if include_same is None:
            include_same = self._include_same
        return [
            {
                "change_type": event.change_type.value,
                "key": event.key,
                "left_value": event.left_value,
                "right_value": event.right_value,
            }
            for event in diff_events(left, right, include_same=include_same)
        ]

    # ------------------------------------------------------------------
    # Save / export
    # ------------------------------------------------------------------

    def export(self, doc_id: str) -> str:
        return self._documents[doc_id].export()

    def save(self, doc_id: str, file_path: Optional[str] = None) -> dict:
        """Write document back to disk."""
        doc = self._documents[doc_id]
        target = save_document(doc, file_path)
        if not doc.file_path:
            doc.file_path = str(target)
        logger.info("Saved document %s to %s", doc_id, target)
        return {"status": "saved", "file_path": str(target)}

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _document_summary(doc_id: str, doc: PropertiesDocument) -> dict:
        kinds = Counter(line.kind.value for line in doc.lines)
        return {
            "doc_id": doc_id,
            "file_path": doc.file_path,
            "total_lines": len(doc),
            "property_count": doc.property_count,
            "kind_counts": dict(kinds),
        }

    @staticmethod
    def _serialize_line(position: int, line: DocumentLine) -> dict:
        return {
            "position": position,
            "kind": line.kind.value,
            "key": line.key,
            "value": line.value,
            "text": serialize_line(line),
        }
