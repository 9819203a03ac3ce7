"""Data models for document-to-markdown export.

A Document is a flat sequence of Blocks (paragraphs, headings, list items), each
made of styled Spans. CommentThreads are anchored to the document through their
quoted text only; there are no character offsets.
"""

from pydantic import BaseModel, Field

DEFAULT_CHARS_PER_PAGE = 3000

# === DOCUMENT ===


class Span(BaseModel):
    """A run of text sharing one style."""

    text: str
    bold: bool = False
    italic: bool = False
    link_url: str | None = None  # takes precedence over bold/italic


class Bullet(BaseModel):
    list_id: str
    nesting_level: int = 0


class Block(BaseModel):
    spans: list[Span] = Field(default_factory=list)
    style_tag: str | None = None  # TITLE, SUBTITLE, HEADING_1, ...
    bullet: Bullet | None = None
    has_page_break: bool = False

    @property
    def plain_text(self) -> str:
        return "".join(span.text for span in self.spans)

    @property
    def char_count(self) -> int:
        return sum(len(span.text) for span in self.spans)


class LevelGlyph(BaseModel):
    glyph_format: str = ""  # e.g. "%0." for numbered, "%0" for bullets
    glyph_type: str | None = None


class Document(BaseModel):
    title: str = ""
    blocks: list[Block] = Field(default_factory=list)
    list_styles: dict[str, list[LevelGlyph]] = Field(default_factory=dict)

    def has_title_block(self) -> bool:
        return any(block.style_tag == "TITLE" for block in self.blocks)


# === COMMENTS ===


class ThreadComment(BaseModel):
    author_name: str
    author_email: str = ""
    content: str
    is_reply: bool = False


class CommentThread(BaseModel):
    """One anchored discussion: the root comment followed by its replies."""

    id: str
    anchor_id: str
    quoted_text: str = ""  # empty for point comments, which are never anchored
    resolved: bool = False
    comments: list[ThreadComment] = Field(default_factory=list)


# === PAGINATION ===


class PageBoundary(BaseModel):
    page_number: int  # 1-based
    start_index: int
    end_index: int  # exclusive
    char_count: int


class PageFilterOptions(BaseModel):
    start_page: int = 1
    page_count: int | None = None  # None: all remaining pages
    chars_per_page: int = DEFAULT_CHARS_PER_PAGE


class PageFilterResult(BaseModel):
    blocks: list[Block]
    total_pages: int
    start_page: int
    end_page: int


# === EXPORT ===


class PageRange(BaseModel):
    start: int
    end: int


class ExportResult(BaseModel):
    markdown: str
    total_pages: int
    page_range: PageRange | None = None
    comment_count: int
