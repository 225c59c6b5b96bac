"""
FastAPI application entry point.

Run:  cd propdoc && python -m uvicorn app.main:app --reload --port 8000
"""
from __future__ import annotations

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
)

from fastapi import FastAPI

from services.document_service import DocumentService
from app.routes import router, init_service

app = FastAPI(title="Properties Document Editor")

init_service(DocumentService(include_same=True))

# API routes
app.include_router(router)
