"""The stories state machine.

``stories_reducer`` is a pure function from (state, action) to a new
state. ``StoriesStore`` owns the current state and serializes dispatches,
since fetch completions land from worker threads.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Sequence, Union

from .datamodels import StoriesState, Story
from .errors import InvalidActionError

logger = logging.getLogger("stories")


# --- Actions ---
@dataclass(frozen=True)
class FetchInit:
    pass


@dataclass(frozen=True)
class FetchSuccess:
    stories: Sequence[Story]
    page: int


@dataclass(frozen=True)
class FetchFailure:
    pass


@dataclass(frozen=True)
class RemoveStory:
    story: Story


StoriesAction = Union[FetchInit, FetchSuccess, FetchFailure, RemoveStory]


def stories_reducer(state: StoriesState, action: StoriesAction) -> StoriesState:
    if isinstance(action, FetchInit):
        return replace(state, is_loading=True, is_error=False)
    if isinstance(action, FetchSuccess):
        if action.page == 0:
            items = tuple(action.stories)
        else:
            items = state.items + tuple(action.stories)
        return replace(
            state,
            items=items,
            page=action.page,
            is_loading=False,
            is_error=False,
        )
    if isinstance(action, FetchFailure):
        return replace(state, is_loading=False, is_error=True)
    if isinstance(action, RemoveStory):
        return replace(
            state,
            items=tuple(
                s for s in state.items if s.object_id != action.story.object_id
            ),
        )
    raise InvalidActionError(f"Unknown stories action: {action!r}")


def get_sum_comments(state: StoriesState) -> int:
    return sum(story.num_comments for story in state.items)


class StoriesStore:
    def __init__(self, state: StoriesState | None = None):
        self._state = state or StoriesState()
        self._lock = threading.Lock()

    @property
    def state(self) -> StoriesState:
        return self._state

    def dispatch(self, action: StoriesAction) -> StoriesState:
        with self._lock:
            self._state = stories_reducer(self._state, action)
            state = self._state
        logger.debug(
            "Dispatched %s: %d items, page %d, loading=%s, error=%s",
            type(action).__name__,
            len(state.items),
            state.page,
            state.is_loading,
            state.is_error,
        )
        return state
