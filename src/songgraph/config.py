"""
Configuration loading for the recommendation engine.

Settings live in ``configs/config.yaml``. Any key missing from the file falls
back to ``DEFAULT_CONFIG``. The ``SONGGRAPH_CONFIG`` environment variable
(read through ``.env`` as well) points to an alternative file.
"""

from __future__ import annotations
import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger

from songgraph.errors import ConfigError

DEFAULT_CONFIG_PATH = "configs/config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "heuristic": {
        "kind": "linear",
        # linear penalty model
        "base_distance": 1.0,
        "artist_match_bonus": 0.5,
        "genre_match_bonus": 0.4,
        "year_gap_cap": 40,
        "year_gap_divisor": 100.0,
        "min_distance": 0.05,
        # score-to-distance model
        "artist_match_score": 5.0,
        "genre_match_score": 3.0,
        "close_year_gap": 2,
        "close_year_score": 2.0,
        "near_year_gap": 5,
        "near_year_score": 1.0,
        "max_score_distance": 10.0,
        "min_score_distance": 0.5,
    },
    "graph": {
        "min_distance": 0.05,
    },
    "recommend": {
        "default_k": 5,
    },
    "selector": {
        "history_size": 20,
        "similar_pool_size": 10,
    },
}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """
    Load the engine configuration.

    Args:
        path: YAML file to read. Defaults to ``$SONGGRAPH_CONFIG`` or
            ``configs/config.yaml``.

    Returns:
        The configuration dict, with defaults filled in.

    Raises:
        ConfigError: If the file does not contain a YAML mapping.
    """
    load_dotenv()

    if path is None:
        path = os.getenv("SONGGRAPH_CONFIG", DEFAULT_CONFIG_PATH)
    path = Path(path)

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(raw).__name__}")

    logger.info(f"Loaded config from {path}")
    return merge_config(DEFAULT_CONFIG, raw)
