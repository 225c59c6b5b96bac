"""
Document I/O — read properties text into a PropertiesDocument, write it back.

This is a functional module.  DocumentService delegates here for the
actual file ↔ document conversion.

Load flow:
    source → text → split_lines → parse_line per line → PropertiesDocument

Save flow:
    PropertiesDocument → serialize → file / stream

File-system errors (``OSError`` and subclasses) propagate unchanged.
Bytes that do not decode raise :class:`DocumentLoadError`.
"""
from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import IO, Mapping, Union

from core.document import PropertiesDocument
from core.errors import DocumentLoadError
from properties.parser import parse
from properties.serializer import serialize

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


# ------------------------------------------------------------------
# File helpers (plain text or gzip)
# ------------------------------------------------------------------

def _is_gz(path: Path) -> bool:
    return path.suffix == ".gz"


def _read_bytes(path: Path) -> bytes:
    if _is_gz(path):
        with gzip.open(path, "rb") as f:
            return f.read()
    return path.read_bytes()


def _write_text(path: Path, content: str, encoding: str) -> None:
    if _is_gz(path):
        with gzip.open(path, "wt", encoding=encoding, newline="") as f:
            f.write(content)
    else:
        with path.open("w", encoding=encoding, newline="") as f:
            f.write(content)


def _decode(data: bytes, encoding: str, origin: str) -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise DocumentLoadError(f"Cannot decode {origin} as {encoding}: {exc}") from exc


# ------------------------------------------------------------------
# Load
# ------------------------------------------------------------------

def load_string(text: str) -> PropertiesDocument:
    return parse(text)


def load_bytes(data: bytes, encoding: str = DEFAULT_ENCODING) -> PropertiesDocument:
    return parse(_decode(data, encoding, "bytes"))


def load_stream(
    reader: Union[IO[str], IO[bytes]],
    encoding: str = DEFAULT_ENCODING,
) -> PropertiesDocument:
    """Read a text or binary file-like object to the end and parse it."""
    content = reader.read()
    if isinstance(content, bytes):
        content = _decode(content, encoding, "stream")
    return parse(content)


def load_mapping(mapping: Mapping[str, str]) -> PropertiesDocument:
    """Build a document with one ``key=value`` line per item, in mapping order."""
    doc = PropertiesDocument()
    for key, value in mapping.items():
        doc.set(key, value)
    return doc


def load_document(
    file_path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
) -> PropertiesDocument:
    """
    Read a properties file and return a fully populated document.

    Files ending in ``.gz`` are decompressed transparently.  The path is
    remembered on the document so :func:`save_document` can write back
    without an explicit target.
    """
    path = Path(file_path)
    text = _decode(_read_bytes(path), encoding, str(path))
    doc = parse(text, file_path=str(path))
    logger.debug("Loaded %s: %d lines", path, len(doc))
    return doc


# ------------------------------------------------------------------
# Save
# ------------------------------------------------------------------

def write_stream(document: PropertiesDocument, writer: IO[str]) -> None:
    writer.write(serialize(document))


def save_document(
    document: PropertiesDocument,
    file_path: Union[str, Path, None] = None,
    encoding: str = DEFAULT_ENCODING,
) -> Path:
    """
    Write a document to disk and return the path written.

    Defaults to the path the document was loaded from.
    """
    target = file_path or document.file_path
    if not target:
        raise ValueError("No file path specified and document has no path.")

    path = Path(target)
    _write_text(path, serialize(document), encoding)
    logger.debug("Saved %d lines to %s", len(document), path)
    return path
