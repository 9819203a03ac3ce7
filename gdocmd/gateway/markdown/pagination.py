"""Page estimation and filtering.

Page boundaries are an approximation: blocks are grouped until a character
budget is exceeded, and hard page breaks force a boundary. A block is never
split across pages.
"""

from loguru import logger

from gdocmd.gateway.markdown.models import (
    DEFAULT_CHARS_PER_PAGE,
    Block,
    CommentThread,
    PageBoundary,
    PageFilterResult,
)


def estimate_pages(blocks: list[Block], chars_per_page: int = DEFAULT_CHARS_PER_PAGE) -> list[PageBoundary]:
    """Partition blocks into estimated pages.

    Args:
        blocks: Content blocks in document order
        chars_per_page: Character budget per page

    Returns:
        Page boundaries covering every non-break block exactly once. An empty
        input yields a single empty page.
    """
    if not blocks:
        return [PageBoundary(page_number=1, start_index=0, end_index=0, char_count=0)]

    pages: list[PageBoundary] = []
    page_start = 0
    char_count = 0

    def close_page(end: int, chars: int) -> None:
        pages.append(
            PageBoundary(page_number=len(pages) + 1, start_index=page_start, end_index=end, char_count=chars)
        )

    for i, block in enumerate(blocks):
        if block.has_page_break:
            # The break block itself belongs to neither page
            if page_start < i or char_count > 0:
                close_page(i, char_count)
            page_start = i + 1
            char_count = 0
            continue

        block_chars = block.char_count
        char_count += block_chars

        # Over budget: the current block opens the next page, unless it is alone
        if char_count > chars_per_page and i > page_start:
            close_page(i, char_count - block_chars)
            page_start = i
            char_count = block_chars

    if page_start < len(blocks) or not pages:
        close_page(len(blocks), char_count)

    logger.debug(f"Estimated {len(pages)} pages from {len(blocks)} blocks ({chars_per_page} chars/page)")
    return pages


def filter_by_page_range(
    blocks: list[Block],
    start_page: int,
    page_count: int | None = None,
    chars_per_page: int = DEFAULT_CHARS_PER_PAGE,
) -> PageFilterResult:
    """Select the blocks of pages [start_page, start_page + page_count).

    start_page is 1-based and clamped into the document; page_count defaults
    to all remaining pages and is clamped at the last page.
    """
    pages = estimate_pages(blocks, chars_per_page)
    total_pages = len(pages)

    clamped_start = min(max(1, start_page), total_pages)
    if page_count is None:
        end_page = total_pages
    else:
        end_page = min(clamped_start + max(1, page_count) - 1, total_pages)

    selected: list[Block] = []
    for page in pages[clamped_start - 1 : end_page]:
        selected.extend(blocks[page.start_index : page.end_index])

    return PageFilterResult(
        blocks=selected,
        total_pages=total_pages,
        start_page=clamped_start,
        end_page=end_page,
    )


def extract_all_text(blocks: list[Block]) -> str:
    return "".join(block.plain_text for block in blocks)


def filter_and_renumber_threads(threads: list[CommentThread], blocks: list[Block]) -> list[CommentThread]:
    """Keep threads whose quoted text occurs in the blocks, renumbered c1..cN.

    Matching is plain substring containment on unstyled text. Threads with an
    empty quote are always dropped. Input threads are not modified.
    """
    full_text = extract_all_text(blocks)
    matching = [thread for thread in threads if thread.quoted_text and thread.quoted_text in full_text]

    if len(matching) < len(threads):
        logger.debug(f"Dropped {len(threads) - len(matching)} of {len(threads)} threads outside the selected blocks")

    return [thread.model_copy(update={"anchor_id": f"c{i}"}) for i, thread in enumerate(matching, start=1)]
