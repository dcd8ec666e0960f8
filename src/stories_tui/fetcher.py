from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import (
    HTTP_TIMEOUT,
    REQUEST_HEADERS,
    RETRY_BACKOFF,
    RETRY_STATUS,
    RETRY_TOTAL,
)
from .datamodels import Story
from .errors import MalformedResponseError, TransportError

logger = logging.getLogger("stories")


def create_session() -> requests.Session:
    s = requests.Session()
    s.headers.update(REQUEST_HEADERS)
    retries = Retry(
        total=RETRY_TOTAL, backoff_factor=RETRY_BACKOFF, status_forcelist=RETRY_STATUS
    )
    adapter = HTTPAdapter(max_retries=retries)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    return s


class StoryFetcher:
    """Fetch capability backed by the Algolia Hacker News search API."""

    def __init__(self, timeout: float = HTTP_TIMEOUT, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or create_session()

    def __call__(self, url: str) -> Dict[str, Any]:
        return self.fetch(url)

    def fetch(self, url: str) -> Dict[str, Any]:
        logger.debug("Fetching %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
        try:
            payload = resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {url} is not JSON") from e
        logger.debug("Fetched %s OK", url)
        return payload


def parse_page(payload: Mapping[str, Any]) -> Tuple[List[Story], int]:
    """Map a search response onto (stories, page)."""
    if not isinstance(payload, Mapping):
        raise MalformedResponseError("Response is not a JSON object")
    hits = payload.get("hits")
    page = payload.get("page")
    if not isinstance(hits, list):
        raise MalformedResponseError("Response has no list of hits")
    if isinstance(page, bool) or not isinstance(page, int) or page < 0:
        raise MalformedResponseError(f"Response has a bad page: {page!r}")
    return [Story.from_hit(hit) for hit in hits], page
