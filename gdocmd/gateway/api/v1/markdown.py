from typing import Any

from fastapi import APIRouter
from loguru import logger
from pydantic import BaseModel, Field

from gdocmd.gateway.config import Settings
from gdocmd.gateway.deps import SettingsDep
from gdocmd.gateway.exceptions import InvalidDocumentIdError
from gdocmd.gateway.google import convert_drive_comments, extract_document_id, parse_google_document
from gdocmd.gateway.markdown import (
    CommentThread,
    Document,
    ExportResult,
    PageFilterOptions,
    transform_with_page_filter,
)

router = APIRouter(prefix="/v1", tags=["Markdown"])


class PageOptions(BaseModel):
    start_page: int = 1
    page_count: int | None = None
    chars_per_page: int | None = None


class MarkdownExportRequest(BaseModel):
    document: Document
    threads: list[CommentThread] = Field(default_factory=list)
    page_options: PageOptions | None = None


class GoogleExportRequest(BaseModel):
    document: dict[str, Any]  # raw Docs API documents.get body
    comments: dict[str, Any] | list[dict[str, Any]] = Field(default_factory=list)  # raw Drive comments.list body
    document_url: str | None = None
    page_options: PageOptions | None = None


class GoogleExportResponse(ExportResult):
    title: str
    document_id: str | None = None


def _resolve_page_options(options: PageOptions | None, settings: Settings) -> PageFilterOptions | None:
    if options is None:
        return None
    return PageFilterOptions(
        start_page=options.start_page,
        page_count=options.page_count,
        chars_per_page=options.chars_per_page or settings.chars_per_page,
    )


@router.post("/markdown", response_model=ExportResult)
def export_markdown(body: MarkdownExportRequest, settings: SettingsDep) -> ExportResult:
    """Render a normalized document and its comment threads as markdown."""
    result = transform_with_page_filter(
        body.document,
        body.threads,
        _resolve_page_options(body.page_options, settings),
    )
    logger.info(
        f"Exported {len(body.document.blocks)} blocks to markdown "
        f"({result.comment_count} comments, {result.total_pages} pages)"
    )
    return result


@router.post("/markdown/google", response_model=GoogleExportResponse)
def export_google_markdown(body: GoogleExportRequest, settings: SettingsDep) -> GoogleExportResponse:
    """Render raw Google Docs + Drive comment payloads as markdown."""
    document_id = None
    if body.document_url is not None:
        document_id = extract_document_id(body.document_url)
        if document_id is None:
            raise InvalidDocumentIdError(body.document_url)

    document = parse_google_document(body.document)
    threads = convert_drive_comments(body.comments)

    result = transform_with_page_filter(document, threads, _resolve_page_options(body.page_options, settings))
    logger.info(f"Exported Google document {document_id or document.title!r} ({len(threads)} threads)")
    return GoogleExportResponse(**result.model_dump(), title=document.title, document_id=document_id)
