from __future__ import annotations

import pytest

from stories_tui.datamodels import StoriesState
from stories_tui.errors import InvalidActionError
from stories_tui.store import (
    FetchFailure,
    FetchInit,
    FetchSuccess,
    RemoveStory,
    StoriesStore,
    get_sum_comments,
    stories_reducer,
)

from .conftest import make_story


A = make_story("A", num_comments=3)
B = make_story("B", num_comments=4)
C = make_story("C", num_comments=5)


def test_initial_state():
    state = StoriesStore().state
    assert state == StoriesState(items=(), page=0, is_loading=False, is_error=False)


def test_fetch_init_sets_loading_and_clears_error():
    state = StoriesState(items=(A,), page=2, is_error=True)
    new_state = stories_reducer(state, FetchInit())
    assert new_state.is_loading is True
    assert new_state.is_error is False
    assert new_state.items == (A,)
    assert new_state.page == 2


def test_end_to_end_scenario():
    store = StoriesStore()

    state = store.dispatch(FetchInit())
    assert state == StoriesState(items=(), page=0, is_loading=True, is_error=False)

    state = store.dispatch(FetchSuccess([A, B], 0))
    assert state.items == (A, B)
    assert not state.is_loading

    state = store.dispatch(FetchSuccess([C], 1))
    assert state.items == (A, B, C)
    assert state.page == 1

    state = store.dispatch(RemoveStory(B))
    assert state.items == (A, C)


def test_page_zero_replaces_items():
    state = StoriesState()
    for payload in ([A], [B, C], [C]):
        state = stories_reducer(state, FetchSuccess(payload, 0))
    assert state.items == (C,)


def test_later_pages_concatenate_in_call_order():
    state = stories_reducer(StoriesState(), FetchSuccess([A], 0))
    state = stories_reducer(state, FetchSuccess([B], 1))
    state = stories_reducer(state, FetchSuccess([C, A], 2))
    # duplicates across pages are kept as-is
    assert state.items == (A, B, C, A)
    assert state.page == 2


def test_failure_after_init_keeps_items():
    store = StoriesStore()
    store.dispatch(FetchSuccess([A, B], 0))
    store.dispatch(FetchInit())
    state = store.dispatch(FetchFailure())
    assert state.items == (A, B)
    assert state.is_error is True
    assert state.is_loading is False


def test_success_clears_error():
    state = StoriesState(is_error=True)
    state = stories_reducer(state, FetchSuccess([A], 0))
    assert state.is_error is False


def test_remove_matches_on_identifier_only():
    state = StoriesState(items=(A, B))
    changed = make_story("B", title="Same id, other fields")
    assert stories_reducer(state, RemoveStory(changed)).items == (A,)


def test_remove_is_idempotent():
    state = StoriesState(items=(A, B, C))
    once = stories_reducer(state, RemoveStory(B))
    twice = stories_reducer(once, RemoveStory(B))
    assert once == twice


def test_remove_missing_story_is_noop():
    state = StoriesState(items=(A,))
    assert stories_reducer(state, RemoveStory(C)) == state


def test_unknown_action_raises():
    with pytest.raises(InvalidActionError):
        stories_reducer(StoriesState(), "REMOVE_STORIES")


def test_unknown_action_propagates_from_store():
    store = StoriesStore()
    with pytest.raises(InvalidActionError):
        store.dispatch(object())
    assert store.state == StoriesState()


def test_sum_comments():
    assert get_sum_comments(StoriesState()) == 0
    assert get_sum_comments(StoriesState(items=(A, B, C))) == 12

