"""Turns search intents into fetch cycles against the stories store."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, List, Mapping, Tuple

from .config import DEFAULT_HISTORY_LIMIT, RECENT_SEARCHES_LIMIT
from .errors import FetchError
from .fetcher import parse_page
from .history import RecentSearches, build_url, extract_search_term
from .store import FetchFailure, FetchInit, FetchSuccess, StoriesStore

logger = logging.getLogger("stories")

FetchCapability = Callable[[str], Mapping[str, Any]]
Scheduler = Callable[[Callable[[], None]], Any]


@dataclass(frozen=True)
class FetchTicket:
    seq: int
    url: str


def run_inline(job: Callable[[], None]) -> None:
    job()


class QueryController:
    def __init__(
        self,
        store: StoriesStore,
        fetch: FetchCapability,
        initial_term: str = "",
        scheduler: Scheduler = run_inline,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        discard_stale: bool = True,
    ):
        self.store = store
        self.fetch = fetch
        self.scheduler = scheduler
        self.history_limit = max(1, history_limit)
        self.discard_stale = discard_stale
        self._recent = RecentSearches(RECENT_SEARCHES_LIMIT)
        self._urls: Tuple[str, ...] = ()
        self._seq = 0
        self._seq_lock = threading.Lock()
        self._append_url(build_url(initial_term, 0))

    @property
    def urls(self) -> Tuple[str, ...]:
        return self._urls

    @property
    def last_url(self) -> str:
        return self._urls[-1]

    @property
    def current_term(self) -> str:
        return extract_search_term(self.last_url)

    @property
    def recent_terms(self) -> List[str]:
        return self._recent.terms

    def _append_url(self, url: str) -> None:
        self._urls = (self._urls + (url,))[-self.history_limit:]
        self._recent.record(url)

    # --- Intents ---
    def start(self) -> None:
        """Fetch the URL the history was seeded with."""
        self._trigger_fetch()

    def issue_search(self, term: str, page: int) -> str:
        url = build_url(term, page)
        logger.info("Issuing search %r page %d", term, page)
        self._append_url(url)
        self._trigger_fetch()
        return url

    def submit_new_search(self, term: str) -> str:
        return self.issue_search(term, 0)

    def rerun_search(self, term: str) -> str:
        return self.issue_search(term, 0)

    def more(self) -> str:
        return self.issue_search(self.current_term, self.store.state.page + 1)

    # --- Fetch cycle ---
    def _trigger_fetch(self) -> None:
        if self.scheduler is run_inline:
            self.run_fetch()
            return
        ticket = self.start_fetch()
        self.scheduler(partial(self.finish_fetch, ticket))

    def start_fetch(self) -> FetchTicket:
        with self._seq_lock:
            self._seq += 1
            ticket = FetchTicket(self._seq, self.last_url)
        self.store.dispatch(FetchInit())
        return ticket

    def finish_fetch(self, ticket: FetchTicket) -> None:
        """Run the blocking fetch for ``ticket`` and dispatch its outcome.

        Fetch-path errors end up as a failure state and never propagate.
        """
        try:
            stories, page = parse_page(self.fetch(ticket.url))
        except FetchError as e:
            logger.warning("Fetch #%d failed: %s", ticket.seq, e)
            action = FetchFailure()
        except Exception:
            logger.exception("Fetch #%d failed unexpectedly", ticket.seq)
            action = FetchFailure()
        else:
            action = FetchSuccess(stories, page)

        if self.is_stale(ticket):
            logger.info(
                "Discarding stale response #%d for %s", ticket.seq, ticket.url
            )
            return
        self.store.dispatch(action)

    def run_fetch(self) -> None:
        """Fetch the last URL in history and dispatch the outcome."""
        self.finish_fetch(self.start_fetch())

    def is_stale(self, ticket: FetchTicket) -> bool:
        if not self.discard_stale:
            return False
        with self._seq_lock:
            return ticket.seq != self._seq
