from __future__ import annotations

from typing import Callable, Dict, List, Sequence

from .datamodels import SortKey, SortSpec, Story

SortFunction = Callable[[Sequence[Story]], List[Story]]


def _ascending(field: str) -> SortFunction:
    return lambda stories: sorted(stories, key=lambda s: getattr(s, field))


def _descending(field: str) -> SortFunction:
    # Stable ascending sort, then flipped: ties come out in reverse input order.
    return lambda stories: _ascending(field)(stories)[::-1]


SORTS: Dict[SortKey, SortFunction] = {
    SortKey.NONE: list,
    SortKey.TITLE: _ascending("title"),
    SortKey.AUTHOR: _ascending("author"),
    SortKey.COMMENT: _descending("num_comments"),
    SortKey.POINT: _descending("points"),
}


def sort_stories(
    stories: Sequence[Story], key: SortKey, is_reverse: bool = False
) -> List[Story]:
    """Return a new list in display order; ``stories`` is left untouched."""
    ordered = SORTS[key](stories)
    if is_reverse:
        ordered.reverse()
    return ordered


def apply_sort(stories: Sequence[Story], spec: SortSpec) -> List[Story]:
    return sort_stories(stories, spec.key, spec.is_reverse)


def next_sort(spec: SortSpec, key: SortKey) -> SortSpec:
    """Sort spec after a click on the ``key`` column header."""
    return SortSpec(key=key, is_reverse=spec.key == key and not spec.is_reverse)


def sort_indicator(spec: SortSpec, key: SortKey) -> str:
    if spec.key is not key or key is SortKey.NONE:
        return ""
    ascending_first = key in (SortKey.TITLE, SortKey.AUTHOR)
    return "▲" if ascending_first != spec.is_reverse else "▼"
