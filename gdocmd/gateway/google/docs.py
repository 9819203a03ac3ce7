"""Google Docs API payloads to Document.

Only the parts of a `documents.get` response the markdown export needs are
modelled; everything else is ignored. See
https://developers.google.com/docs/api/reference/rest/v1/documents
"""

from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from gdocmd.gateway.exceptions import GooglePayloadError
from gdocmd.gateway.markdown.models import Block, Bullet, Document, LevelGlyph, Span


class GoogleModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Link(GoogleModel):
    url: str | None = None
    heading_id: str | None = None


class TextStyle(GoogleModel):
    bold: bool = False
    italic: bool = False
    link: Link | None = None


class TextRun(GoogleModel):
    content: str = ""
    text_style: TextStyle | None = None


class ParagraphElement(GoogleModel):
    text_run: TextRun | None = None
    inline_object_element: dict[str, Any] | None = None
    page_break: dict[str, Any] | None = None


class ParagraphStyle(GoogleModel):
    named_style_type: str | None = None


class GoogleBullet(GoogleModel):
    list_id: str
    nesting_level: int = 0


class Paragraph(GoogleModel):
    elements: list[ParagraphElement] = Field(default_factory=list)
    paragraph_style: ParagraphStyle | None = None
    bullet: GoogleBullet | None = None


class StructuralElement(GoogleModel):
    paragraph: Paragraph | None = None
    section_break: dict[str, Any] | None = None
    table: dict[str, Any] | None = None
    table_of_contents: dict[str, Any] | None = None


class Body(GoogleModel):
    content: list[StructuralElement] = Field(default_factory=list)


class NestingLevel(GoogleModel):
    glyph_format: str | None = None
    glyph_type: str | None = None


class ListProperties(GoogleModel):
    nesting_levels: list[NestingLevel] = Field(default_factory=list)


class DocList(GoogleModel):
    list_properties: ListProperties = Field(default_factory=ListProperties)


class GoogleDocsDocument(GoogleModel):
    document_id: str | None = None
    title: str = ""
    body: Body = Field(default_factory=Body)
    lists: dict[str, DocList] = Field(default_factory=dict)


def _to_span(run: TextRun) -> Span:
    style = run.text_style or TextStyle()
    return Span(
        text=run.content,
        bold=style.bold,
        italic=style.italic,
        link_url=style.link.url if style.link else None,
    )


def _to_block(paragraph: Paragraph) -> Block:
    # Inline objects (images, drawings) carry no text
    spans = [_to_span(el.text_run) for el in paragraph.elements if el.text_run is not None]
    return Block(
        spans=spans,
        style_tag=paragraph.paragraph_style.named_style_type if paragraph.paragraph_style else None,
        bullet=(
            Bullet(list_id=paragraph.bullet.list_id, nesting_level=paragraph.bullet.nesting_level)
            if paragraph.bullet
            else None
        ),
        has_page_break=any(el.page_break is not None for el in paragraph.elements),
    )


def to_document(doc: GoogleDocsDocument) -> Document:
    blocks = []
    skipped = 0
    for element in doc.body.content:
        if element.paragraph is None:
            skipped += 1
            continue
        blocks.append(_to_block(element.paragraph))

    if skipped:
        logger.debug(f"Skipped {skipped} non-paragraph elements in document {doc.document_id}")

    list_styles = {
        list_id: [
            LevelGlyph(glyph_format=level.glyph_format or "", glyph_type=level.glyph_type)
            for level in details.list_properties.nesting_levels
        ]
        for list_id, details in doc.lists.items()
    }
    return Document(title=doc.title, blocks=blocks, list_styles=list_styles)


def parse_google_document(payload: dict[str, Any]) -> Document:
    """Validate a raw Docs API response and convert it to a Document.

    Raises:
        GooglePayloadError: if the payload does not match the Docs API shape
    """
    try:
        doc = GoogleDocsDocument.model_validate(payload)
    except PydanticValidationError as e:
        raise GooglePayloadError("Google Docs", e.errors(include_url=False, include_context=False)) from e
    return to_document(doc)
