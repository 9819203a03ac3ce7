"""Transform a Document and its comment threads to markdown.

Output is plain markdown: headings, lists and inline styles, with comments as
footnote-style anchors (`[quoted text]^[c1]`) followed by blockquotes right
after the block they were made on.
"""

import re

from loguru import logger

from gdocmd.gateway.markdown.comments import (
    AnchorPlacement,
    apply_anchors,
    format_comment_thread,
    locate_anchors,
)
from gdocmd.gateway.markdown.models import (
    Block,
    Bullet,
    CommentThread,
    Document,
    ExportResult,
    LevelGlyph,
    PageFilterOptions,
    PageRange,
    Span,
)
from gdocmd.gateway.markdown.pagination import (
    estimate_pages,
    filter_and_renumber_threads,
    filter_by_page_range,
)

# SUBTITLE is handled separately (rendered as italic)
HEADING_PREFIXES: dict[str, str] = {
    "TITLE": "# ",
    "HEADING_1": "## ",
    "HEADING_2": "### ",
    "HEADING_3": "#### ",
    "HEADING_4": "##### ",
    "HEADING_5": "###### ",
}

_BLANK_RUN_RE = re.compile(r"\n{3,}")


# === INLINE TEXT ===


def apply_text_style(span: Span) -> str:
    if span.link_url:
        return f"[{span.text}]({span.link_url})"

    # Bold wraps italic
    text = span.text
    if span.italic:
        text = f"_{text}_"
    if span.bold:
        text = f"**{text}**"
    return text


def render_spans(spans: list[Span]) -> str:
    """Render styled spans as inline markdown. Newlines are kept as-is."""
    return "".join(apply_text_style(span) for span in spans)


def render_spans_with_links(spans: list[Span]) -> tuple[str, list[tuple[int, int]]]:
    """Render spans and report where each link target `(url)` sits in the output.

    Anchors must never be placed inside those ranges.
    """
    parts: list[str] = []
    link_ranges: list[tuple[int, int]] = []
    length = 0
    for span in spans:
        rendered = apply_text_style(span)
        if span.link_url:
            target_start = length + len(span.text) + 2  # after "[text]"
            link_ranges.append((target_start, length + len(rendered)))
        parts.append(rendered)
        length += len(rendered)
    return "".join(parts), link_ranges


# === LISTS ===


def is_ordered_glyph(glyph: LevelGlyph | None) -> bool:
    """Numbered formats look like "%0." or "[%0]"; bullets have no placeholder."""
    if glyph is None:
        return False
    fmt = glyph.glyph_format
    return "%" in fmt and ("." in fmt or fmt.startswith("["))


def list_prefix(bullet: Bullet, list_styles: dict[str, list[LevelGlyph]]) -> str:
    level = max(bullet.nesting_level, 0)
    padding = "  " * level

    levels = list_styles.get(bullet.list_id, [])
    glyph = levels[level] if level < len(levels) else None

    return f"{padding}1. " if is_ordered_glyph(glyph) else f"{padding}- "


# === DOCUMENT ===


class MarkdownTransformer:
    """Walks document blocks in order and assembles the markdown lines.

    Anchors are numbered c1, c2, ... in the order they are placed in the
    document, so incoming anchor ids only matter for uniqueness upstream.
    """

    def __init__(self, document: Document, threads: list[CommentThread]):
        self.document = document
        self.threads = threads
        self._lines: list[str] = []
        self._prev_was_list = False
        self._anchor_counter = 0
        self._pending: list[CommentThread] = []

    def _next_anchor_id(self) -> str:
        self._anchor_counter += 1
        return f"c{self._anchor_counter}"

    def transform(self) -> str:
        self._lines = []
        self._prev_was_list = False
        self._anchor_counter = 0
        # Threads not anchored yet; each thread is anchored at most once
        self._pending = [thread for thread in self.threads if thread.quoted_text]

        if not self.document.has_title_block() and self.document.title.strip():
            self._lines.extend([f"# {self.document.title}", ""])

        for block in self.document.blocks:
            self._transform_block(block)

        logger.debug(
            f"Rendered {len(self.document.blocks)} blocks, "
            f"anchored {self._anchor_counter} of {len(self.threads)} threads"
        )
        return self._finalize()

    def _transform_block(self, block: Block) -> None:
        raw_text, link_ranges = render_spans_with_links(block.spans)

        if not raw_text.strip():
            # Blank line between paragraphs, never inside a list run; list state carries over
            if not self._prev_was_list:
                self._lines.append("")
            return

        text = raw_text[:-1] if raw_text.endswith("\n") else raw_text
        is_list = block.bullet is not None

        anchored = self._anchor_threads(text, link_ranges)
        text = apply_anchors(text, anchored)
        threads = [placement.thread for placement in anchored]

        if block.bullet is not None:
            line = list_prefix(block.bullet, self.document.list_styles) + text
            if not self._prev_was_list and self._lines and self._lines[-1] != "":
                self._lines.append("")
        elif block.style_tag == "SUBTITLE":
            line = f"_{text.strip()}_"
        elif block.style_tag in HEADING_PREFIXES:
            line = HEADING_PREFIXES[block.style_tag] + text
        else:
            line = text

        if not is_list and self._prev_was_list:
            self._lines.append("")

        self._lines.append(line.rstrip())

        if is_list:
            # Keep the list run contiguous
            self._lines.extend(format_comment_thread(thread) for thread in threads)
        else:
            for thread in threads:
                self._lines.extend(["", format_comment_thread(thread)])
            self._lines.append("")

        self._prev_was_list = is_list

    def _anchor_threads(self, text: str, link_ranges: list[tuple[int, int]]) -> list[AnchorPlacement]:
        """Place pending threads in this block's text and number them in order.

        Link targets are off limits, so a quote found only inside a URL stays pending.
        """
        candidates = [thread for thread in self._pending if thread.quoted_text in text]
        if not candidates:
            return []

        placements = locate_anchors(text, candidates, protected=link_ranges)
        placed = [placement.thread for placement in placements]
        self._pending = [thread for thread in self._pending if all(thread is not p for p in placed)]

        return [
            AnchorPlacement(
                placement.start,
                placement.end,
                placement.thread.model_copy(update={"anchor_id": self._next_anchor_id()}),
            )
            for placement in placements
        ]

    def _finalize(self) -> str:
        result = "\n".join(self._lines)
        result = _BLANK_RUN_RE.sub("\n\n", result)
        return result.rstrip() + "\n"


def transform_to_markdown(document: Document, threads: list[CommentThread]) -> str:
    """Transform a document and its comment threads to a markdown string."""
    return MarkdownTransformer(document, threads).transform()


def transform_with_page_filter(
    document: Document,
    threads: list[CommentThread],
    options: PageFilterOptions | None = None,
) -> ExportResult:
    """Transform only the requested estimated pages of a document.

    Without options this is transform_to_markdown plus the page count. With
    options, blocks outside the page range are dropped and only threads whose
    quoted text survives are kept, renumbered from c1.
    """
    if options is None:
        pages = estimate_pages(document.blocks)
        return ExportResult(
            markdown=transform_to_markdown(document, threads),
            total_pages=len(pages),
            page_range=None,
            comment_count=len(filter_and_renumber_threads(threads, document.blocks)),
        )

    filtered = filter_by_page_range(
        document.blocks,
        start_page=options.start_page,
        page_count=options.page_count,
        chars_per_page=options.chars_per_page,
    )
    filtered_threads = filter_and_renumber_threads(threads, filtered.blocks)
    filtered_document = document.model_copy(update={"blocks": filtered.blocks})

    logger.debug(
        f"Page filter {filtered.start_page}-{filtered.end_page} of {filtered.total_pages}: "
        f"{len(filtered.blocks)} blocks, {len(filtered_threads)} threads"
    )

    return ExportResult(
        markdown=transform_to_markdown(filtered_document, filtered_threads),
        total_pages=filtered.total_pages,
        page_range=PageRange(start=filtered.start_page, end=filtered.end_page),
        comment_count=len(filtered_threads),
    )
