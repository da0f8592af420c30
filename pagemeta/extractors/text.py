"""Whitespace normalisation for text pulled out of the DOM."""

from __future__ import annotations

import re

_WHITESPACE_RUN_RE = re.compile(r"[\n\r \t]+")


def text_normalise(text: str) -> str:
    """Collapse every whitespace run in *text* into one space and trim."""
    return _WHITESPACE_RUN_RE.sub(" ", text).strip()
