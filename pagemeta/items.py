"""Pydantic record for an article moving through the extraction pipeline."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Article(BaseModel):
    """Shared, mutable record that pipeline stages read and fill in place.

    URL fields (``url``, ``final_url``, ``link_hash``, ``domain``) and the
    parsed ``doc`` are set before extraction starts; the metadata stage
    fills the rest.  ``doc`` is any :class:`~pagemeta.document.Document`
    and is left out of ``model_dump()``.
    """

    # Identity
    url: str = ""
    final_url: str = ""
    link_hash: str = ""
    domain: str = ""

    # Metadata
    title: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    canonical_link: str = ""
    language: str = ""
    open_graph: dict[str, str] = Field(default_factory=dict)

    # Parsed document handle
    doc: Any = Field(default=None, exclude=True, repr=False)

    @field_validator("url", "final_url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""
