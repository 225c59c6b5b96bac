"""
PropertiesDocument — ordered, key-indexed container of DocumentLines.

The document is the **single in-memory representation** of a properties
file.  It is the source of truth for:

- Keyed access           → ``get`` / ``set`` / ``delete`` in O(1)
- Comment attachment     → ``comment`` / ``uncomment`` edit the run of
                            comment lines directly above a property
- Serialization order    → lines are rendered strictly in sequence order

Storage is an arena of slots linked into a doubly linked sequence.  The
key index maps each property key to a :class:`Handle` (slot number plus
generation).  A slot's generation is bumped whenever it is freed, so a
handle can never silently resolve to a record that replaced the one it
was created for.  Inserting or removing lines elsewhere in the sequence
never touches existing handles.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, NamedTuple, Optional

from core.accessors import TypedAccessors
from core.document_line import (
    DEFAULT_COMMENT_LEADER,
    CommentLine,
    DocumentLine,
    PropertyLine,
    split_lines,
)
from core.line_kind import LineKind

logger = logging.getLogger(__name__)

_NIL = -1

PropertyVisitor = Callable[[str, str], Optional[bool]]
LineVisitor = Callable[[DocumentLine], Optional[bool]]


class Handle(NamedTuple):
    """Stable reference to one record in a document's arena."""
    slot: int
    generation: int


class _Slot:
    __slots__ = ("line", "prev", "next", "generation")

    def __init__(self, line: Optional[DocumentLine], generation: int = 0) -> None:
        self.line = line
        self.prev = _NIL
        self.next = _NIL
        self.generation = generation


class PropertiesDocument(TypedAccessors):
    """
    Mutable ordered collection of :class:`DocumentLine` records.

    Internal invariant: every key in ``_index`` resolves to a live
    :class:`PropertyLine` carrying that key.  Comment and blank lines are
    never indexed.  When a key repeats while loading, the last occurrence
    owns the index entry and earlier lines stay in the sequence untouched.

    Visitors passed to :meth:`for_each_property` and :meth:`accept` stop
    the walk by returning ``False``; any other return value (including
    ``None``) continues it.
    """

    __slots__ = ("file_path", "_slots", "_free", "_head", "_tail", "_size",
                 "_index", "_lines_cache")

    def __init__(
        self,
        lines: Optional[Iterable[DocumentLine]] = None,
        file_path: str = "",
    ):
        self.file_path: str = file_path
        self._slots: list[_Slot] = []
        self._free: list[int] = []
        self._head: int = _NIL
        self._tail: int = _NIL
        self._size: int = 0
        self._index: dict[str, Handle] = {}
        self._lines_cache: tuple[DocumentLine, ...] | None = None
        for line in lines or ():
            self.append_line(line)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def lines(self) -> tuple[DocumentLine, ...]:
        """Return a cached tuple so callers cannot break internal ordering."""
        if self._lines_cache is None:
            self._lines_cache = tuple(self)
        return self._lines_cache

    @property
    def property_count(self) -> int:
        return len(self._index)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[DocumentLine]:
        for handle in self._iter_handles():
            yield self._slots[handle.slot].line

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __str__(self) -> str:
        return self.export()

    def __repr__(self) -> str:
        return (f"PropertiesDocument(lines={self._size}, "
                f"properties={len(self._index)}, file_path={self.file_path!r})")

    def get(self, key: str) -> Optional[str]:
        """Current value of *key*, or ``None`` if the key is not present."""
        handle = self._index.get(key)
        if handle is None:
            return None
        return self._resolve(handle).line.value

    def must_get(self, key: str) -> str:
        """Like :meth:`get` but raises ``KeyError`` for a missing key."""
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def handle_of(self, key: str) -> Handle:
        """Handle of the indexed record for *key*.  Raises KeyError."""
        return self._index[key]

    def line_at(self, handle: Handle) -> DocumentLine:
        """Resolve a handle.  Raises ``LookupError`` if it is stale."""
        return self._resolve(handle).line

    def keys(self) -> list[str]:
        """Distinct property keys in order of first appearance."""
        return list(self.to_dict())

    def to_dict(self) -> dict[str, str]:
        """Indexed keys and their values; agrees with :meth:`get`.

        Earlier duplicates left unindexed by a delete are skipped.
        """
        result: dict[str, str] = {}
        for key, value in self.properties():
            if key in self._index:
                result[key] = value
        return result

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def properties(self) -> Iterator[tuple[str, str]]:
        """Yield ``(key, value)`` for every property line, in sequence order."""
        for line in self:
            if line.kind is LineKind.PROPERTY:
                yield line.key, line.value

    def for_each_property(self, visitor: PropertyVisitor) -> None:
        """Call ``visitor(key, value)`` for each property line until it returns False."""
        for key, value in self.properties():
            if visitor(key, value) is False:
                return

    def accept(self, visitor: LineVisitor) -> None:
        """Call ``visitor(line)`` for every line, comments and blanks included."""
        for line in self:
            if visitor(line) is False:
                return

    for_each_line = accept

    # ------------------------------------------------------------------
    # Keyed mutations
    # ------------------------------------------------------------------

    def set(self, key: str, value: str) -> None:
        """
        Update *key* in place, or append a new ``key=value`` line.

        An existing line keeps its position and separator character.
        """
        handle = self._index.get(key)
        if handle is not None:
            self._resolve(handle).line.value = value
            return
        self.append_line(PropertyLine(key=key, value=value))

    def delete(self, key: str) -> bool:
        """Remove *key* and the comment block attached above it."""
        if key not in self._index:
            return False
        self.uncomment(key)
        self._unlink(self._index.pop(key))
        logger.debug("Deleted property %r", key)
        return True

    def comment(self, key: str, text: str = "") -> bool:
        """
        Insert comment lines directly above *key*.

        Each line of *text* becomes one ``#``-prefixed comment line, in
        order.  Empty *text* inserts a lone ``#``.  Repeated calls stack,
        with the newest block closest to the property.
        """
        handle = self._index.get(key)
        if handle is None:
            return False

        comment_lines = split_lines(text) if text else [""]
        for line in comment_lines:
            self._link_before(
                self._allocate(CommentLine(DEFAULT_COMMENT_LEADER + line)),
                handle,
            )
        logger.debug("Commented property %r with %d line(s)", key, len(comment_lines))
        return True

    def uncomment(self, key: str) -> bool:
        """
        Remove the contiguous comment lines directly above *key*.

        The walk stops at the first property line, blank line, or the
        start of the document, so comments separated by a blank line or
        belonging to an earlier property are kept.
        """
        handle = self._index.get(key)
        if handle is None:
            return False

        removed = 0
        cursor = self._resolve(handle).prev
        while cursor != _NIL:
            slot = self._slots[cursor]
            if slot.line.kind is not LineKind.COMMENT:
                break
            previous = slot.prev
            self._unlink(Handle(cursor, slot.generation))
            removed += 1
            cursor = previous
        if removed:
            logger.debug("Uncommented property %r: removed %d line(s)", key, removed)
        return True

    # ------------------------------------------------------------------
    # Line-level mutations
    # ------------------------------------------------------------------

    def append_line(self, line: DocumentLine) -> Handle:
        """
        Append *line* to the end of the sequence.

        Property lines take over the index entry for their key, so a key
        that repeats resolves to its last occurrence.
        """
        handle = self._allocate(line)
        slot = self._slots[handle.slot]
        slot.prev = self._tail
        if self._tail == _NIL:
            self._head = handle.slot
        else:
            self._slots[self._tail].next = handle.slot
        self._tail = handle.slot
        self._size += 1
        self._lines_cache = None
        if line.kind is LineKind.PROPERTY:
            self._index[line.key] = handle
        return handle

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def export(self) -> str:
        """Render the document as properties text."""
        from properties.serializer import serialize
        return serialize(self)

    # ------------------------------------------------------------------
    # Arena internals
    # ------------------------------------------------------------------

    def _allocate(self, line: DocumentLine) -> Handle:
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
            slot.line = line
            slot.prev = slot.next = _NIL
        else:
            index = len(self._slots)
            slot = _Slot(line)
            self._slots.append(slot)
        return Handle(index, slot.generation)

    def _resolve(self, handle: Handle) -> _Slot:
        slot = self._slots[handle.slot]
        if slot.generation != handle.generation or slot.line is None:
            raise LookupError(f"Stale handle: {handle}")
        return slot

    def _iter_handles(self) -> Iterator[Handle]:
        cursor = self._head
        while cursor != _NIL:
            slot = self._slots[cursor]
            following = slot.next
            yield Handle(cursor, slot.generation)
            cursor = following

    def _link_before(self, new: Handle, anchor: Handle) -> None:
        """Link the freshly allocated *new* immediately before *anchor*."""
        anchor_slot = self._resolve(anchor)
        new_slot = self._slots[new.slot]
        new_slot.next = anchor.slot
        new_slot.prev = anchor_slot.prev
        if anchor_slot.prev == _NIL:
            self._head = new.slot
        else:
            self._slots[anchor_slot.prev].next = new.slot
        anchor_slot.prev = new.slot
        self._size += 1
        self._lines_cache = None

    def _unlink(self, handle: Handle) -> DocumentLine:
        slot = self._resolve(handle)
        if slot.prev == _NIL:
            self._head = slot.next
        else:
            self._slots[slot.prev].next = slot.next
        if slot.next == _NIL:
            self._tail = slot.prev
        else:
            self._slots[slot.next].prev = slot.prev

        line = slot.line
        slot.line = None
        slot.prev = slot.next = _NIL
        slot.generation += 1
        self._free.append(handle.slot)
        self._size -= 1
        self._lines_cache = None
        return line
