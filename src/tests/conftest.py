from __future__ import annotations

import pytest

from stories_tui.datamodels import Story


def make_story(object_id: str, **fields) -> Story:
    values = {
        "url": f"https://example.com/{object_id}",
        "title": f"Story {object_id}",
        "author": "pg",
        "num_comments": 0,
        "points": 0,
    }
    values.update(fields)
    return Story(object_id=object_id, **values)


def make_hit(object_id: str, **fields) -> dict:
    hit = {
        "objectID": object_id,
        "url": f"https://example.com/{object_id}",
        "title": f"Story {object_id}",
        "author": "pg",
        "num_comments": 1,
        "points": 10,
    }
    hit.update(fields)
    return hit


@pytest.fixture
def stories():
    return [
        make_story("a", title="React", author="dan", num_comments=5, points=40),
        make_story("b", title="Python", author="guido", num_comments=12, points=40),
        make_story("c", title="Go", author="rob", num_comments=5, points=7),
    ]
