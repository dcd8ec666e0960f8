from __future__ import annotations

import logging
import webbrowser
from typing import Any, List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.worker import Worker, WorkerState
from textual.widgets import Button, DataTable, Header, Input

from .config import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_SEARCH_TERM,
    DEFAULT_THEME,
    HTTP_TIMEOUT,
    SEARCH_TERM_KEY,
    STATE_PATH,
    UI_DEFAULTS,
)
from .controller import FetchCapability, QueryController
from .datamodels import SortKey, SortSpec
from .fetcher import StoryFetcher
from .persistence import SemiPersistentValue
from .sorting import apply_sort, next_sort
from .store import RemoveStory, StoriesStore, get_sum_comments
from .widgets import LastSearchButton, StatusBar, StoriesTable

logger = logging.getLogger("stories")

STORIES_WORKER = "stories_loader"


class StoriesApp(App):
    TITLE = "My Hacker Stories"

    CSS_PATH = "app.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("m", "more", "More"),
        Binding("d", "dismiss_story", "Dismiss"),
        Binding("o", "open_story", "Open in browser"),
        Binding("r", "refresh", "Refresh"),
        Binding("/", "focus_search", "Search"),
    ]

    def __init__(
        self,
        theme: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
        fetch: Optional[FetchCapability] = None,
        search_term: Optional[str] = None,
        state_path: str = STATE_PATH,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.config = config or {}
        self._theme_name = theme or self.config.get("theme") or DEFAULT_THEME
        if self._theme_name not in self.available_themes:
            logger.warning(
                "Theme %r not found, falling back to %s", self._theme_name, DEFAULT_THEME
            )
            self._theme_name = DEFAULT_THEME
        self.search_term = SemiPersistentValue(
            SEARCH_TERM_KEY, DEFAULT_SEARCH_TERM, path=state_path
        )
        if search_term is not None:
            self.search_term.save(search_term)

        if fetch is None:
            fetch = StoryFetcher(timeout=self.config.get("http_timeout", HTTP_TIMEOUT))
        self.store = StoriesStore()
        self.controller = QueryController(
            self.store,
            fetch,
            initial_term=self.search_term.value,
            scheduler=self._schedule_fetch,
            history_limit=self.config.get("history_limit", DEFAULT_HISTORY_LIMIT),
            discard_stale=self.config.get("discard_stale_responses", True),
        )
        self.sort_spec = SortSpec()
        self._shown_recent: Optional[List[str]] = None

    @property
    def theme_name(self) -> str:
        return self._theme_name

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="search-bar"):
            yield Input(
                value=self.search_term.value,
                placeholder="Search stories...",
                id="search-input",
            )
            yield Button(
                "Submit",
                id="submit-search",
                variant="primary",
                disabled=not self.search_term.value,
            )
        yield Horizontal(id="last-searches")
        yield StoriesTable(id="stories-table")
        yield Button("More", id="more")
        yield StatusBar()

    def on_mount(self) -> None:
        self.theme = self._theme_name
        self.query_one(StatusBar).set_keybindings(
            UI_DEFAULTS["statusbar_keybindings"].format(color="cyan")
        )
        self.controller.start()
        self.refresh_view()
        self.query_one("#search-input", Input).focus()

    # --- Fetch plumbing ---
    def _schedule_fetch(self, job) -> None:
        self.run_worker(job, name=STORIES_WORKER, group="stories", thread=True)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if getattr(event.worker, "name", None) != STORIES_WORKER:
            return
        if event.state is WorkerState.ERROR:
            # finish_fetch converts fetch errors itself; anything here is a bug.
            logger.error("Stories worker failed: %s", event.worker.error)
        if event.state not in (WorkerState.PENDING, WorkerState.RUNNING):
            self.refresh_view()

    # --- Rendering ---
    def refresh_view(self) -> None:
        state = self.store.state
        self.sub_title = f"with {get_sum_comments(state)} comments"
        self.query_one(StoriesTable).show_stories(
            apply_sort(state.items, self.sort_spec), self.sort_spec
        )
        self.query_one("#more", Button).display = not state.is_loading

        if state.is_loading:
            status = "Loading ..."
        elif state.is_error:
            status = "[b red]Something went wrong ...[/]"
        else:
            status = f"{len(state.items)} stories, page {state.page + 1}"
        self.query_one(StatusBar).status_text = status

        self._refresh_last_searches()

    def _refresh_last_searches(self) -> None:
        recent = self.controller.recent_terms
        if recent == self._shown_recent:
            return
        self._shown_recent = recent
        container = self.query_one("#last-searches", Horizontal)
        container.remove_children()
        container.mount(*[LastSearchButton(term) for term in recent])

    # --- Intents ---
    def _submit(self, term: str) -> None:
        if not term:
            return
        self.search_term.save(term)
        self.controller.submit_new_search(term)
        self.refresh_view()

    def _rerun(self, term: str) -> None:
        self.query_one("#search-input", Input).value = term
        self.search_term.save(term)
        self.controller.rerun_search(term)
        self.refresh_view()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self.query_one("#submit-search", Button).disabled = not event.value

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input":
            self._submit(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if isinstance(event.button, LastSearchButton):
            self._rerun(event.button.search_term)
        elif event.button.id == "submit-search":
            self._submit(self.query_one("#search-input", Input).value)
        elif event.button.id == "more":
            self.action_more()

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        self.sort_spec = next_sort(self.sort_spec, SortKey(event.column_key.value))
        logger.debug("Sorting by %s", self.sort_spec)
        self.refresh_view()

    def action_more(self) -> None:
        if self.store.state.is_loading:
            return
        self.controller.more()
        self.refresh_view()

    def action_refresh(self) -> None:
        self._rerun(self.controller.current_term)

    def action_dismiss_story(self) -> None:
        story = self.query_one(StoriesTable).highlighted_story()
        if story is None:
            return
        self.store.dispatch(RemoveStory(story))
        self.refresh_view()

    def action_open_story(self) -> None:
        story = self.query_one(StoriesTable).highlighted_story()
        if story is not None and story.url:
            webbrowser.open(story.url)

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()
