"""Document and comment thread transformation to markdown."""

from gdocmd.gateway.markdown.comments import format_comment_thread, insert_anchors
from gdocmd.gateway.markdown.models import (
    Block,
    Bullet,
    CommentThread,
    Document,
    ExportResult,
    LevelGlyph,
    PageBoundary,
    PageFilterOptions,
    PageRange,
    Span,
    ThreadComment,
)
from gdocmd.gateway.markdown.pagination import (
    estimate_pages,
    filter_and_renumber_threads,
    filter_by_page_range,
)
from gdocmd.gateway.markdown.transformer import (
    MarkdownTransformer,
    list_prefix,
    render_spans,
    render_spans_with_links,
    transform_to_markdown,
    transform_with_page_filter,
)

__all__ = [
    # Transformer
    "MarkdownTransformer",
    "transform_to_markdown",
    "transform_with_page_filter",
    "render_spans",
    "render_spans_with_links",
    "list_prefix",
    # Comments
    "insert_anchors",
    "format_comment_thread",
    # Pagination
    "estimate_pages",
    "filter_by_page_range",
    "filter_and_renumber_threads",
    # Models
    "Document",
    "Block",
    "Span",
    "Bullet",
    "LevelGlyph",
    "CommentThread",
    "ThreadComment",
    "PageBoundary",
    "PageFilterOptions",
    "PageRange",
    "ExportResult",
]
