from __future__ import annotations

import json
import logging
import os
from typing import Dict

from .config import STATE_PATH

logger = logging.getLogger("stories")


def load_state_file(path: str = STATE_PATH) -> Dict[str, str]:
    """Load the persisted key/value pairs."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logger.warning("Failed to read state file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring state file %s: not a JSON object", path)
        return {}
    return data


def save_state_file(data: Dict[str, str], path: str = STATE_PATH) -> None:
    """Save the persisted key/value pairs."""
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    except IOError as e:
        logger.error("Failed to save state file %s: %s", path, e)


class SemiPersistentValue:
    """A single string that survives restarts.

    Read once at construction, written back whenever it changes.
    """

    def __init__(self, key: str, default: str = "", path: str = STATE_PATH):
        self.key = key
        self.default = default
        self.path = path
        self.value = self.load()

    def load(self) -> str:
        value = load_state_file(self.path).get(self.key)
        if not isinstance(value, str):
            return self.default
        logger.debug("Loaded %s=%r from %s", self.key, value, self.path)
        return value

    def save(self, value: str) -> None:
        if value == self.value:
            return
        self.value = value
        data = load_state_file(self.path)
        data[self.key] = value
        save_state_file(data, self.path)
        logger.debug("Saved %s=%r to %s", self.key, value, self.path)
