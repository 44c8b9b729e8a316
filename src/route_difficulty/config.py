"""Settings for clustering and display, read from JSON config files."""

import json
import logging
from pathlib import Path

from route_difficulty.formatters import FormatOptions
from route_difficulty.models import ClusterOptions

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "route-difficulty"
CONFIG_PATH = CONFIG_DIR / "route-difficulty.json"
LOCAL_CONFIG_PATH = Path("route-difficulty.json")

_CLUSTER_DEFAULTS = ClusterOptions()
_FORMAT_DEFAULTS = FormatOptions()

DEFAULTS = {
    "grade_threshold": _CLUSTER_DEFAULTS.grade_threshold,  # percent
    "adjacency_epsilon_km": _CLUSTER_DEFAULTS.adjacency_epsilon_km,
    "base_pace_min_per_km": 6.0,
    "units": _FORMAT_DEFAULTS.units,
    "locale": _FORMAT_DEFAULTS.locale,
}


def load_config(paths: list[Path] | None = None) -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/route-difficulty/route-difficulty.json (global, loaded first)
    2. ./route-difficulty.json (local, overrides global)

    Args:
        paths: Files to merge in order; later files override earlier ones

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    if paths is None:
        paths = [CONFIG_PATH, LOCAL_CONFIG_PATH]

    config = {}
    for config_path in paths:
        if not config_path.exists():
            continue
        try:
            with config_path.open() as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Skipping unreadable config file %s: %s", config_path, e)
            continue
        if not isinstance(data, dict):
            logger.warning("Skipping config file %s: expected a JSON object", config_path)
            continue
        config.update(data)
    return config


def get_setting(config: dict, key: str):
    """Return a config value, falling back to DEFAULTS."""
    return config.get(key, DEFAULTS[key])


def cluster_options_from_config(config: dict | None = None) -> ClusterOptions:
    if config is None:
        config = load_config()
    return ClusterOptions(
        grade_threshold=float(get_setting(config, "grade_threshold")),
        adjacency_epsilon_km=float(get_setting(config, "adjacency_epsilon_km")),
    )


def format_options_from_config(config: dict | None = None) -> FormatOptions:
    if config is None:
        config = load_config()
    return FormatOptions(
        units=get_setting(config, "units"),
        locale=get_setting(config, "locale"),
    )


def base_pace_from_config(config: dict | None = None) -> float:
    """Return the configured flat-terrain pace in min/km."""
    if config is None:
        config = load_config()
    pace = float(get_setting(config, "base_pace_min_per_km"))
    if pace <= 0:
        raise ValueError(f"Base pace must be positive, got {pace}")
    return pace
