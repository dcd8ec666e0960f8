#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys

from .app import StoriesApp
from .config import DEFAULT_THEME, load_config, save_config, setup_logging

logger = logging.getLogger("stories")


# --- Entrypoint ---
def main() -> None:
    parser = argparse.ArgumentParser(description="Hacker Stories TUI Client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--theme", type=str, help="Set theme for this run")
    parser.add_argument(
        "--search", type=str, help="Search term to start with (remembered for next time)"
    )
    args = parser.parse_args()

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    config = load_config()
    theme_name = args.theme or config.get("theme") or DEFAULT_THEME

    try:
        app = StoriesApp(theme=theme_name, config=config, search_term=args.search)
        if app.theme_name != theme_name:
            print(
                f"Theme '{theme_name}' not found, falling back to {app.theme_name}.",
                file=sys.stderr,
            )
            if not args.theme:
                # the bad name came from the config file; don't warn every run
                config["theme"] = app.theme_name
                save_config(config)

        logger.info("Using theme: %s", app.theme_name)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)


if __name__ == "__main__":
    main()
