import re

_DOCUMENT_URL_RE = re.compile(r"/document/d/([a-zA-Z0-9_-]+)")
_DOCUMENT_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")


def extract_document_id(value: str | None) -> str | None:
    """Extract a Google Docs document id from a URL, or accept a bare id.

    Bare ids must be longer than 10 characters to be told apart from ordinary words.
    """
    if not value or not isinstance(value, str):
        return None

    trimmed = value.strip()
    if not trimmed:
        return None

    if match := _DOCUMENT_URL_RE.search(trimmed):
        return match.group(1)

    if _DOCUMENT_ID_RE.match(trimmed) and len(trimmed) > 10:
        return trimmed

    return None
