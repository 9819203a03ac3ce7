"""Google Drive comment payloads to CommentThreads.

The Docs API does not expose comments; they come from the Drive API
`comments.list` endpoint, where each comment carries its replies and the text
it was made on (`quotedFileContent`).
"""

from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from gdocmd.gateway.exceptions import GooglePayloadError
from gdocmd.gateway.markdown.models import CommentThread, ThreadComment


class DriveModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CommentAuthor(DriveModel):
    display_name: str = ""
    email_address: str | None = None


class QuotedFileContent(DriveModel):
    mime_type: str | None = None
    value: str = ""


class CommentReply(DriveModel):
    id: str | None = None
    author: CommentAuthor = Field(default_factory=CommentAuthor)
    content: str = ""
    deleted: bool = False


class DriveComment(DriveModel):
    id: str
    author: CommentAuthor = Field(default_factory=CommentAuthor)
    content: str = ""
    deleted: bool = False
    resolved: bool = False
    quoted_file_content: QuotedFileContent | None = None
    replies: list[CommentReply] = Field(default_factory=list)


class DriveCommentsResponse(DriveModel):
    comments: list[DriveComment] = Field(default_factory=list)
    next_page_token: str | None = None


def _to_thread_comment(author: CommentAuthor, content: str, is_reply: bool) -> ThreadComment:
    return ThreadComment(
        author_name=author.display_name,
        author_email=author.email_address or "",
        content=content,
        is_reply=is_reply,
    )


def to_threads(comments: list[DriveComment]) -> list[CommentThread]:
    """Convert Drive comments to threads numbered c1..cN in input order.

    Deleted comments and replies are dropped, as are resolved comments that no
    longer quote any text.
    """
    kept = [
        comment
        for comment in comments
        if not comment.deleted and (not comment.resolved or comment.quoted_file_content)
    ]
    if len(kept) < len(comments):
        logger.debug(f"Dropped {len(comments) - len(kept)} deleted or unanchored resolved comments")

    return [
        CommentThread(
            id=comment.id,
            anchor_id=f"c{i}",
            quoted_text=comment.quoted_file_content.value if comment.quoted_file_content else "",
            resolved=comment.resolved,
            comments=[
                _to_thread_comment(comment.author, comment.content, is_reply=False),
                *(
                    _to_thread_comment(reply.author, reply.content, is_reply=True)
                    for reply in comment.replies
                    if not reply.deleted
                ),
            ],
        )
        for i, comment in enumerate(kept, start=1)
    ]


def convert_drive_comments(payload: dict[str, Any] | list[dict[str, Any]]) -> list[CommentThread]:
    """Validate a `comments.list` response (or its `comments` array) and convert it.

    Raises:
        GooglePayloadError: if the payload does not match the Drive API shape
    """
    if isinstance(payload, list):
        payload = {"comments": payload}
    try:
        response = DriveCommentsResponse.model_validate(payload)
    except PydanticValidationError as e:
        raise GooglePayloadError("Google Drive comments", e.errors(include_url=False, include_context=False)) from e
    return to_threads(response.comments)
