"""
Pytest configuration and shared fixtures.

Every fixture works inside tmp_path; nothing touches the repo's data/,
streams/ or outputs/ folders.
"""
import json
from pathlib import Path

import pytest

from functions.config import load_config

CHANNELS = [
    {
        "id": "CNN.us",
        "name": "CNN",
        "categories": ["news"],
        "languages": ["eng"],
        "broadcast_area": ["c/US"],
        "is_nsfw": False,
        "logo": "http://logos/cnn.png",
    },
    {
        "id": "France24.fr",
        "name": "France 24",
        "categories": ["news"],
        "languages": ["fra", "eng"],
        "broadcast_area": ["r/EUR"],
        "is_nsfw": False,
        "logo": None,
    },
    {
        "id": "Adult.us",
        "name": "Adult",
        "categories": ["xxx"],
        "languages": ["eng"],
        "broadcast_area": ["c/US"],
        "is_nsfw": True,
    },
]

CATEGORIES = [{"id": "news", "name": "News"}, {"id": "xxx", "name": "XXX"}]
LANGUAGES = [{"code": "eng", "name": "English"}, {"code": "fra", "name": "French"}]
COUNTRIES = [
    {"code": "US", "name": "United States", "languages": ["eng"]},
    {"code": "FR", "name": "France", "languages": ["fra"]},
]
REGIONS = [{"code": "EUR", "name": "Europe", "countries": ["FR"]}]
SUBDIVISIONS = [{"code": "US-CA", "name": "California", "country": "US"}]
BLOCKLIST = [{"channel": "CNNInternational.us", "ref": "DMCA-123"}]


@pytest.fixture
def workspace(tmp_path):
    """Config dict whose paths all point inside tmp_path."""
    cfg = load_config(tmp_path / "missing.yml")
    cfg["paths"] = {key: str(tmp_path / value) for key, value in cfg["paths"].items()}
    for key in ("data_dir", "streams_dir"):
        Path(cfg["paths"][key]).mkdir(parents=True, exist_ok=True)
    return cfg


@pytest.fixture
def data_dir(workspace):
    path = Path(workspace["paths"]["data_dir"])
    for name, rows in (
        ("channels.json", CHANNELS),
        ("categories.json", CATEGORIES),
        ("languages.json", LANGUAGES),
        ("countries.json", COUNTRIES),
        ("regions.json", REGIONS),
        ("subdivisions.json", SUBDIVISIONS),
        ("blocklist.json", BLOCKLIST),
    ):
        (path / name).write_text(json.dumps(rows), encoding="utf-8")
    return path


@pytest.fixture
def streams_dir(workspace):
    return Path(workspace["paths"]["streams_dir"])


@pytest.fixture
def write_playlist(streams_dir):
    """Write a playlist into the streams folder and return its absolute path."""
    def _write(name, text):
        path = streams_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text.lstrip("\n"), encoding="utf-8")
        return str(path)
    return _write
