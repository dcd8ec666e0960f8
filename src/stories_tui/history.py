"""Query URLs and the recent-searches window derived from them."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple
from urllib.parse import quote, unquote

from .config import (
    API_BASE,
    API_SEARCH,
    PARAM_PAGE,
    PARAM_SEARCH,
    RECENT_SEARCHES_LIMIT,
)

SEARCH_PREFIX = f"{API_BASE}{API_SEARCH}?{PARAM_SEARCH}"
PAGE_DELIMITER = f"&{PARAM_PAGE}"


class MalformedQueryURLError(ValueError):
    """A URL that does not have the ``<base>?query=<term>&page=<n>`` shape."""


def build_url(term: str, page: int) -> str:
    return f"{SEARCH_PREFIX}{quote(term, safe='')}{PAGE_DELIMITER}{page}"


def decompose_url(url: str) -> Tuple[str, int]:
    """Split a query URL back into its (term, page)."""
    if not url.startswith(SEARCH_PREFIX):
        raise MalformedQueryURLError(f"Not a search URL: {url!r}")
    idx = url.rfind(PAGE_DELIMITER)
    if idx < len(SEARCH_PREFIX):
        raise MalformedQueryURLError(f"Search URL has no page parameter: {url!r}")
    page = url[idx + len(PAGE_DELIMITER):]
    if not page.isdigit():
        raise MalformedQueryURLError(f"Search URL has a bad page parameter: {url!r}")
    return unquote(url[len(SEARCH_PREFIX):idx]), int(page)


def extract_search_term(url: str) -> str:
    return decompose_url(url)[0]


def collapse_terms(terms: Iterable[str]) -> List[str]:
    """Drop each term that repeats the one right before it."""
    collapsed: List[str] = []
    for term in terms:
        if not collapsed or collapsed[-1] != term:
            collapsed.append(term)
    return collapsed


def derive_recent_terms(
    urls: Iterable[str], limit: int = RECENT_SEARCHES_LIMIT
) -> List[str]:
    """Return up to ``limit`` previous search terms, oldest first.

    The last collapsed term is the active search and is left out.
    """
    collapsed = collapse_terms(extract_search_term(url) for url in urls)
    return collapsed[-(limit + 1):][:-1]


class RecentSearches:
    """Incremental form of ``derive_recent_terms``.

    Feeding it every issued URL gives the same window as rescanning the
    full history, without having to keep that history around.
    """

    def __init__(self, limit: int = RECENT_SEARCHES_LIMIT):
        self.limit = limit
        self._window: Deque[str] = deque(maxlen=limit + 1)

    @property
    def last_term(self) -> Optional[str]:
        return self._window[-1] if self._window else None

    def record(self, url: str) -> None:
        term = extract_search_term(url)
        if term != self.last_term:
            self._window.append(term)

    @property
    def terms(self) -> List[str]:
        return list(self._window)[:-1]
