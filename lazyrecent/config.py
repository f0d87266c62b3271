"""Persistent JSON config helpers.

Stores the snippet context size, the last shown history category and the
Pygments style. All access is defensive: malformed or missing config falls
back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .snippets.window import DEFAULT_CONTEXT_LINES
from .syntax import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "lazyrecent"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write failures are logged only."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not save config to %s: %s", CONFIG_PATH, exc)


def load_context_lines() -> int:
    """Return lines of context shown before and after each location.

    Booleans, non-integers and negative values fall back to the default.
    """
    value = load_config().get("context_lines")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_CONTEXT_LINES
    return value


def save_context_lines(context_lines: int) -> None:
    if context_lines < 0:
        return
    config = load_config()
    config["context_lines"] = int(context_lines)
    save_config(config)


def load_show_changed() -> bool:
    """Return whether the changed-locations category was last selected."""
    value = load_config().get("show_changed")
    return value if isinstance(value, bool) else False


def save_show_changed(show_changed: bool) -> None:
    config = load_config()
    config["show_changed"] = bool(show_changed)
    save_config(config)


def load_style_name() -> str:
    value = load_config().get("style")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_STYLE
    return value.strip()
