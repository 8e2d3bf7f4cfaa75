"""Persistent harness configuration shared by the app and the validation script."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONFIG_FILE = Path(".poi_atlas_config.json")

DEFAULT_CONFIG: Dict[str, Any] = {
    "locale": "en",
    "campaigns_dir": "campaigns",
    "log_level": "INFO",
}


def load_config() -> Dict[str, Any]:
    """Load persistent configuration from disk, filling in defaults."""
    config = dict(DEFAULT_CONFIG)
    if CONFIG_FILE.exists():
        try:
            config.update(json.loads(CONFIG_FILE.read_text()))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, e)
    return config


def save_config(config: Dict[str, Any]) -> None:
    """Save persistent configuration to disk."""
    try:
        CONFIG_FILE.write_text(json.dumps(config, indent=2))
    except OSError as e:
        # Don't disrupt UX if config save fails
        logger.warning("Could not save config %s: %s", CONFIG_FILE, e)
