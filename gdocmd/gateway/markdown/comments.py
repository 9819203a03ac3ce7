"""Comment anchors and blockquote rendering.

Comments only carry the text they were made on, not its position, so anchors are
placed by searching for that text. Each thread takes the first occurrence in a
line that no other thread has claimed. This is a heuristic: repeated or edited
text can end up anchored at the wrong occurrence.
"""

from collections.abc import Sequence
from typing import NamedTuple

from gdocmd.gateway.markdown.models import CommentThread


class AnchorPlacement(NamedTuple):
    start: int
    end: int
    thread: CommentThread


def _overlaps(start: int, end: int, taken: list[tuple[int, int]]) -> bool:
    return any(start < other_end and other_start < end for other_start, other_end in taken)


def locate_anchors(
    text: str,
    threads: list[CommentThread],
    protected: Sequence[tuple[int, int]] = (),
) -> list[AnchorPlacement]:
    """Find where each thread's quoted text should be anchored in a line.

    Longer quotes are placed first so a short quote cannot take text out of a
    longer one that contains it. Threads with an empty quote, or whose every
    occurrence is already taken, get no placement.

    Args:
        text: The rendered line
        threads: Threads to place
        protected: `(start, end)` ranges no anchor may touch, e.g. link targets

    Returns:
        Placements ordered by position in the line
    """
    candidates = sorted(
        (thread for thread in threads if thread.quoted_text),
        key=lambda thread: len(thread.quoted_text),
        reverse=True,
    )

    claimed: list[AnchorPlacement] = []
    taken = list(protected)
    for thread in candidates:
        quote = thread.quoted_text
        pos = text.find(quote)
        while pos != -1 and _overlaps(pos, pos + len(quote), taken):
            pos = text.find(quote, pos + 1)
        if pos != -1:
            claimed.append(AnchorPlacement(pos, pos + len(quote), thread))
            taken.append((pos, pos + len(quote)))

    return sorted(claimed, key=lambda placement: placement.start)


def apply_anchors(text: str, placements: list[AnchorPlacement]) -> str:
    """Wrap each placed span as `[text]^[anchorId]`."""
    parts = []
    cursor = 0
    for placement in sorted(placements, key=lambda p: p.start):
        parts.append(text[cursor : placement.start])
        parts.append(f"[{text[placement.start : placement.end]}]^[{placement.thread.anchor_id}]")
        cursor = placement.end
    parts.append(text[cursor:])
    return "".join(parts)


def insert_anchors(text: str, threads: list[CommentThread]) -> str:
    """Anchor every thread whose quoted text occurs in the line, first occurrence only."""
    return apply_anchors(text, locate_anchors(text, threads))


def format_comment_thread(thread: CommentThread) -> str:
    """Render a thread as a blockquote, one header line per comment."""
    label = f"{thread.anchor_id} resolved" if thread.resolved else thread.anchor_id

    rendered = []
    for comment in thread.comments:
        header = f"> [{label}] **{comment.author_name}** ({comment.author_email}):"
        body = "\n".join(f"> {line}" for line in comment.content.split("\n"))
        rendered.append(f"{header}\n{body}")

    return "\n>\n".join(rendered)
