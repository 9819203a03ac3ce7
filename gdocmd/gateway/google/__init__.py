"""Adapters from Google Docs and Drive API payloads to the export models."""

from gdocmd.gateway.google.docs import parse_google_document
from gdocmd.gateway.google.drive import convert_drive_comments
from gdocmd.gateway.google.urls import extract_document_id

__all__ = [
    "parse_google_document",
    "convert_drive_comments",
    "extract_document_id",
]
