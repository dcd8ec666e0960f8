from __future__ import annotations

from typing import List, Sequence

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Button, DataTable, Static

from .datamodels import SortKey, SortSpec, Story
from .sorting import sort_indicator

# (sort key, header label, column width)
COLUMNS = [
    (SortKey.TITLE, "Title", 60),
    (SortKey.AUTHOR, "Author", 18),
    (SortKey.COMMENT, "Comments", 10),
    (SortKey.POINT, "Points", 8),
]


# --- UI Widgets ---
class LastSearchButton(Button):
    def __init__(self, search_term: str):
        super().__init__(search_term or "(front page)", classes="last-search")
        self.search_term = search_term


class StoriesTable(DataTable):
    """Story rows in display order, with clickable sort headers."""

    def __init__(self, **kwargs):
        super().__init__(cursor_type="row", zebra_stripes=True, **kwargs)
        self.rows_in_order: List[Story] = []

    def show_stories(self, stories: Sequence[Story], spec: SortSpec) -> None:
        cursor_row = self.cursor_row
        self.clear(columns=True)
        for key, label, width in COLUMNS:
            self.add_column(self._header(key, label, spec), key=key.value, width=width)
        self.rows_in_order = list(stories)
        for s in self.rows_in_order:
            self.add_row(
                s.title,
                s.author,
                Text(str(s.num_comments), justify="right"),
                Text(str(s.points), justify="right"),
            )
        if self.rows_in_order:
            self.move_cursor(row=min(cursor_row, len(self.rows_in_order) - 1))

    def _header(self, key: SortKey, label: str, spec: SortSpec) -> Text:
        arrow = sort_indicator(spec, key)
        if arrow:
            return Text(f"{label} {arrow}", style="bold reverse")
        return Text(label)

    def highlighted_story(self) -> Story | None:
        if not self.is_valid_row_index(self.cursor_row):
            return None
        return self.rows_in_order[self.cursor_row]


class StatusBar(Static):
    status_text = reactive("")
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def set_keybindings(self, hint: str) -> None:
        """Set the keybinding hint text."""
        self.keybinding_hint = hint

    def update_display(self) -> None:
        """Update the status bar display."""
        status_items = []
        if self.status_text:
            status_items.append(self.status_text)

        if self.keybinding_hint:
            status_items.append(self.keybinding_hint)

        self.update(" | ".join(status_items))

    def watch_status_text(self, status_text: str) -> None:
        self.update_display()

    def watch_keybinding_hint(self, keybinding_hint: str) -> None:
        self.update_display()
