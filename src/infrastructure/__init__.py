from infrastructure.document_io import (
    load_bytes,
    load_document,
    load_mapping,
    load_stream,
    load_string,
    save_document,
    write_stream,
)

__all__ = [
    "load_bytes",
    "load_document",
    "load_mapping",
    "load_stream",
    "load_string",
    "save_document",
    "write_stream",
]
