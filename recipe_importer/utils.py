"""Utility helpers shared between services."""
from __future__ import annotations

import re
from urllib.parse import unquote

from bs4 import BeautifulSoup

from .logging_config import get_logger

logger = get_logger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def html_to_text(raw: str) -> str:
    """Return the text content of ``raw`` read as an HTML body (tags dropped, entities decoded)."""
    soup = BeautifulSoup(f"<body>{raw}</body>", "html.parser")
    return soup.get_text()


def normalize_text(raw: str | None) -> str:
    """Decode entities and percent escapes, then collapse whitespace.

    Never raises. Percent decoding is all or nothing: if any escape is malformed
    (a bare ``%``, ``%zz``) or the bytes are not UTF-8, the text is kept as it
    was after entity decoding.
    """
    if not raw:
        return ""

    decoded = html_to_text(raw)

    if _MALFORMED_ESCAPE.search(decoded):
        logger.warning("Skipping percent decoding of %r: malformed escape", decoded[:80])
    elif "%" in decoded:
        try:
            decoded = unquote(decoded, errors="strict")
        except UnicodeDecodeError as exc:
            logger.warning("Error decoding URL-encoded text %r: %s", decoded[:80], exc)

    return _WHITESPACE_RUN.sub(" ", decoded).strip()


__all__ = ["html_to_text", "normalize_text"]
