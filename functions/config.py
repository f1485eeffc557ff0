#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/config.py
# [PROJECT] ChannelLedger
# [ROLE] YAML config loading with built-in defaults
# [VERSION] v1.0
# [UPDATED] 2026-10-19
# ==============================================================================

import copy
import os
from pathlib import Path
from typing import Optional

import yaml

from functions.paths import BASE_DIR, resolve_path

CONFIG_PATH = BASE_DIR / "config" / "channelledger.yml"

DEFAULTS = {
    "paths": {
        "data_dir": "data",
        "streams_dir": "streams",
        "database": "database/streams.db",
        "outputs_dir": "outputs",
        "archive_dir": "archive",
        "logs_dir": "logs",
    },
    "playlist": {
        "extension": "m3u",
    },
    "api": {
        "enabled": False,
        "base_url": "https://iptv-org.github.io/api",
        "user_agent": "ChannelLedger/1.0",
        "timeout_sec": 30,
        "files": [
            "channels.json",
            "categories.json",
            "countries.json",
            "languages.json",
            "regions.json",
            "subdivisions.json",
            "blocklist.json",
        ],
    },
}


def load_yaml(path: Path) -> dict:
    with Path(path).open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config(path: Optional[Path] = None) -> dict:
    """Defaults, overlaid with the YAML file when it exists."""
    path = path or os.getenv("CHANNELLEDGER_CONFIG") or CONFIG_PATH
    path = resolve_path(path)
    if not path.exists():
        return copy.deepcopy(DEFAULTS)
    return _merge(DEFAULTS, load_yaml(path))


def cfg_path(cfg: dict, key: str) -> Path:
    return resolve_path(cfg.get("paths", {}).get(key, DEFAULTS["paths"][key]))
