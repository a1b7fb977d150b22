from __future__ import annotations

import html

import bleach


ALLOWED_TAGS: list[str] = []
ALLOWED_ATTRIBUTES: dict[str, list[str]] = {}


def sanitize_text(value: str) -> str:
    """Strip every HTML tag from user-supplied text before it is stored.

    Responses are JSON, so entities bleach escapes (``&`` -> ``&amp;``) are unescaped again.
    """
    return html.unescape(bleach.clean(value, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True)).strip()
