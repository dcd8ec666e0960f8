from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple

from .errors import MalformedResponseError


# --- Data models ---
@dataclass(frozen=True)
class Story:
    object_id: str
    url: str
    title: str
    author: str
    num_comments: int
    points: int

    @classmethod
    def from_hit(cls, hit: Mapping[str, Any]) -> Story:
        """Map one raw search hit onto a Story.

        Every field must be present. JSON nulls are tolerated (Ask HN posts
        have no url) but a count that is not an integer is rejected.
        """
        if not isinstance(hit, Mapping):
            raise MalformedResponseError(f"Hit is not an object: {hit!r}")
        try:
            object_id = hit["objectID"]
            url = hit["url"]
            title = hit["title"]
            author = hit["author"]
            num_comments = hit["num_comments"]
            points = hit["points"]
        except KeyError as e:
            raise MalformedResponseError(f"Hit is missing field {e}") from e

        if object_id is None:
            raise MalformedResponseError("Hit has a null objectID")

        return cls(
            object_id=str(object_id),
            url=url or "",
            title=title or "",
            author=author or "",
            num_comments=_as_count(num_comments, "num_comments", non_negative=True),
            points=_as_count(points, "points"),
        )


def _as_count(value: Any, field: str, non_negative: bool = False) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedResponseError(f"Field {field} is not an integer: {value!r}")
    if non_negative and value < 0:
        raise MalformedResponseError(f"Field {field} is negative: {value!r}")
    return value


@dataclass(frozen=True)
class StoriesState:
    items: Tuple[Story, ...] = ()
    page: int = 0
    is_loading: bool = False
    is_error: bool = False


class SortKey(str, Enum):
    NONE = "NONE"
    TITLE = "TITLE"
    AUTHOR = "AUTHOR"
    COMMENT = "COMMENT"
    POINT = "POINT"


@dataclass(frozen=True)
class SortSpec:
    key: SortKey = SortKey.NONE
    is_reverse: bool = False
