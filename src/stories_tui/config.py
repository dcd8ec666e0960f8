from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

# --- Configuration ---
API_BASE = "https://hn.algolia.com/api/v1"
API_SEARCH = "/search"
PARAM_SEARCH = "query="
PARAM_PAGE = "page="
HTTP_TIMEOUT = 15

CONFIG_PATH = os.path.expanduser("~/.config/stories/config.json")
STATE_PATH = os.path.expanduser("~/.config/stories/state.json")

REQUEST_HEADERS = {
    "User-Agent": "stories-tui/0.1 (+https://hn.algolia.com/api)",
    "Accept": "application/json",
}
RETRY_TOTAL = 3
RETRY_BACKOFF = 0.3
RETRY_STATUS = [429, 500, 502, 503, 504]

SEARCH_TERM_KEY = "search"
DEFAULT_SEARCH_TERM = ""
RECENT_SEARCHES_LIMIT = 5
DEFAULT_HISTORY_LIMIT = 50
DEFAULT_THEME = "dracula"

DEFAULT_CONFIG: Dict[str, Any] = {
    "theme": DEFAULT_THEME,
    "history_limit": DEFAULT_HISTORY_LIMIT,
    "discard_stale_responses": True,
    "http_timeout": HTTP_TIMEOUT,
}

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": (
        "[b {color}]m[/] more, [b {color}]d[/] dismiss, "
        "[b {color}]o[/] open, [b {color}]/[/] search"
    ),
}

# --- Logging ---
logger = logging.getLogger("stories")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/stories_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists(path: str = CONFIG_PATH) -> None:
    """Write the default config file if the user's config file is not found."""
    if not os.path.exists(path):
        logger.info("Config file not found at %s, creating default.", path)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w") as f:
                json.dump(DEFAULT_CONFIG, f, indent=2)
        except OSError as e:
            logger.error("Failed to create default config file: %s", e)


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load the main configuration file, layered over the defaults."""
    ensure_config_file_exists(path)
    config = dict(DEFAULT_CONFIG)
    try:
        with open(path, "r") as f:
            config.update(json.load(f))
            logger.info("Loaded config from %s", path)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
    return config


def save_config(config: Dict[str, Any], path: str = CONFIG_PATH) -> None:
    """Save the main configuration file."""
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", path)
    except IOError as e:
        logger.error("Failed to save config to %s: %s", path, e)
