from __future__ import annotations


class StoriesError(Exception):
    """Base class for errors raised by the stories client."""


class FetchError(StoriesError):
    """A fetch cycle could not produce a page of stories."""


class TransportError(FetchError):
    """The request failed or timed out."""


class MalformedResponseError(FetchError):
    """The response could not be mapped onto a page of stories."""


class InvalidActionError(StoriesError):
    """An unknown action reached the stories reducer.

    This is a wiring defect, never a runtime condition, so it is not caught.
    """
