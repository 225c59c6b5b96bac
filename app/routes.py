"""
API routes for the properties editor.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from typing import Optional

from core import DocumentLoadError
from services.document_service import DocumentService


router = APIRouter(prefix="/api")

# Singleton service — created in main.py and attached here
_service: Optional[DocumentService] = None


def init_service(svc: DocumentService) -> None:
    global _service
    _service = svc


def svc() -> DocumentService:
    if _service is None:
        raise RuntimeError("DocumentService not initialized")
    return _service


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class NewDocumentRequest(BaseModel):
    doc_id: str
    text: str = ""


class LoadRequest(BaseModel):
    doc_id: str
    file_path: str


class SetPropertyRequest(BaseModel):
    value: str


class CommentRequest(BaseModel):
    text: str = ""


class SaveRequest(BaseModel):
    file_path: Optional[str] = None


# ------------------------------------------------------------------
# Documents
# ------------------------------------------------------------------

@router.get("/documents")
def list_documents():
    """List all open documents."""
    return svc().list_documents()


@router.post("/documents")
def new_document(req: NewDocumentRequest):
    """Create a document from properties text (empty text → empty document)."""
    return svc().new(req.doc_id, req.text)


@router.post("/documents/load")
def load_document(req: LoadRequest):
    """Load a properties file into memory."""
    try:
        return svc().load(req.doc_id, req.file_path)
    except FileNotFoundError:
        raise HTTPException(404, f"File not found: {req.file_path}")
    except DocumentLoadError as e:
        raise HTTPException(400, str(e))
    except OSError as e:
        raise HTTPException(500, str(e))


@router.delete("/documents/{doc_id}")
def close_document(doc_id: str):
    try:
        svc().close_document(doc_id)
    except KeyError:
        raise HTTPException(404, f"Document not found: {doc_id}")
    return {"status": "closed", "doc_id": doc_id}


@router.get("/documents/{doc_id}/lines")
def get_lines(doc_id: str, offset: int = 0, limit: Optional[int] = None):
    """Get lines in a document, comments and blanks included."""
    try:
        return svc().get_lines(doc_id, offset=offset, limit=limit)
    except KeyError:
        raise HTTPException(404, f"Document not found: {doc_id}")


@router.get("/documents/{doc_id}/text", response_class=PlainTextResponse)
def export_text(doc_id: str):
    """Serialized properties text."""
    try:
        return svc().export(doc_id)
    except KeyError:
        raise HTTPException(404, f"Document not found: {doc_id}")


@router.post("/documents/{doc_id}/save")
def save_doc(doc_id: str, req: SaveRequest):
    """Save a document back to disk."""
    try:
        return svc().save(doc_id, req.file_path)
    except KeyError:
        raise HTTPException(404, f"Document not found: {doc_id}")
    except ValueError as e:
        raise HTTPException(400, str(e))
    except OSError as e:
        raise HTTPException(500, str(e))


# ------------------------------------------------------------------
# Properties
# ------------------------------------------------------------------

@router.get("/documents/{doc_id}/properties")
def get_properties(doc_id: str):
    try:
        return svc().get_properties(doc_id)
    except KeyError:
        raise HTTPException(404, f"Document not found: {doc_id}")


@router.get("/documents/{doc_id}/properties/{key:path}")
def get_property(doc_id: str, key: str):
    try:
        return svc().get_property(doc_id, key)
    except KeyError:
        raise HTTPException(404, "Document or property not found")


@router.put("/documents/{doc_id}/properties/{key:path}")
def set_property(doc_id: str, key: str, req: SetPropertyRequest):
    """Update a property in place, or append it when new."""
    try:
        return svc().set_property(doc_id, key, req.value)
    except KeyError:
        raise HTTPException(404, f"Document not found: {doc_id}")
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.delete("/documents/{doc_id}/properties/{key:path}")
def delete_property(doc_id: str, key: str):
    """Delete a property together with its attached comment block."""
    try:
        return svc().delete_property(doc_id, key)
    except KeyError:
        raise HTTPException(404, "Document or property not found")


# ------------------------------------------------------------------
# Comments
# ------------------------------------------------------------------

@router.post("/documents/{doc_id}/comments/{key:path}")
def comment_property(doc_id: str, key: str, req: CommentRequest):
    """Insert comment lines directly above a property."""
    try:
        return svc().comment_property(doc_id, key, req.text)
    except KeyError:
        raise HTTPException(404, "Document or property not found")


@router.delete("/documents/{doc_id}/comments/{key:path}")
def uncomment_property(doc_id: str, key: str):
    """Remove the comment block directly above a property."""
    try:
        return svc().uncomment_property(doc_id, key)
    except KeyError:
        raise HTTPException(404, "Document or property not found")


# ------------------------------------------------------------------
# Diff
# ------------------------------------------------------------------

@router.get("/diff")
def diff_documents(left: str, right: str, include_same: Optional[bool] = None):
    """Classified key changes from *left* to *right*."""
    try:
        return svc().diff(left, right, include_same)
    except KeyError as e:
        raise HTTPException(404, f"Document not found: {e.args[0]}")
