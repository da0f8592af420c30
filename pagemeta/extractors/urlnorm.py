"""URL cleaning: hash-bang rewriting, link hashing and domain helpers."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

# Raw characters that can never appear unescaped in a URI
_ILLEGAL_CHARS_RE = re.compile(r'[\x00-\x20\x7f<>"]')

_HASHBANG = "#!"
_ESCAPED_FRAGMENT = "_escaped_fragment_="


class MalformedURLError(ValueError):
    """Raised when a URL string cannot be parsed into URI components.

    Attributes:
        url -- the string that failed to parse
    """

    def __init__(self, url: str) -> None:
        super().__init__(f"{url} - is a malformed URL and cannot be processed")
        self.url = url


@dataclass(frozen=True)
class CleanedUrl:
    """Parsed, hashed and crawler-friendly form of a URL."""

    url: str
    parts: SplitResult
    link_hash: str
    final_url: str


def _split(url: str) -> SplitResult:
    if _ILLEGAL_CHARS_RE.search(url):
        raise MalformedURLError(url)
    try:
        parts = urlsplit(url)
        # Accessing .port validates the numeric range and format
        parts.port  # noqa: B018
    except ValueError as exc:
        raise MalformedURLError(url) from exc

    # "http:///path" and "http://:80" carry an authority marker but no host
    if parts.scheme and parts.scheme != "file":
        after_scheme = url[len(parts.scheme) + 1:]
        if after_scheme.startswith("//") and not parts.hostname:
            raise MalformedURLError(url)
    return parts


def link_hash(url: str) -> str:
    """Return the stable MD5 hex digest used as a cache/dedup key for *url*."""
    return hashlib.md5(url.encode("utf-8")).hexdigest()  # noqa: S324


def clean_url(url: str) -> CleanedUrl:
    """Parse *url* and rewrite any ``#!`` into an ``_escaped_fragment_`` query.

    Example:
        http://x.com/a#!b      → http://x.com/a?_escaped_fragment_=b
        http://x.com/a?c=1#!b  → http://x.com/a?c=1&_escaped_fragment_=b

    The hash is always computed from the original string, so two calls
    with the same input agree regardless of the rewrite.

    Raises:
        MalformedURLError: If *url* cannot be parsed.
    """
    parts = _split(url)
    prefix = "&" if parts.query else "?"
    final_url = url.replace(_HASHBANG, prefix + _ESCAPED_FRAGMENT)

    return CleanedUrl(
        url=url,
        parts=parts,
        link_hash=link_hash(url),
        final_url=final_url,
    )


def extract_domain(url: str) -> str:
    """Return the lowercased host of *url*, or "" if it has none.

    Unlike the netloc, the port is dropped: the result is what gets
    stripped out of page titles, and titles never carry ports.
    """
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""
