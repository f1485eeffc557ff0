#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/storage.py
# [PROJECT] ChannelLedger
# [ROLE] Reference JSON loading and the SQLite stream database
# [VERSION] v1.0
# [UPDATED] 2026-10-19
# ==============================================================================

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from functions.models import (
    Blocked,
    Category,
    Channel,
    Country,
    DataError,
    Language,
    Region,
    Stream,
    Subdivision,
)

log = logging.getLogger(__name__)


def load_json_records(path: Path) -> List[dict]:
    with Path(path).open("r", encoding="utf-8") as f:
        try:
            content = json.load(f)
        except json.JSONDecodeError as e:
            raise DataError(f"{Path(path).name}: invalid JSON ({e})") from e
    if not isinstance(content, list):
        raise DataError(f"{Path(path).name}: expected a list of records")
    return content


@dataclass
class ReferenceData:
    channels: List[Channel] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    countries: List[Country] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    regions: List[Region] = field(default_factory=list)
    subdivisions: List[Subdivision] = field(default_factory=list)
    blocklist: List[Blocked] = field(default_factory=list)


# attribute -> (file name, record type, required)
REFERENCE_FILES = {
    "channels": ("channels.json", Channel, True),
    "categories": ("categories.json", Category, False),
    "countries": ("countries.json", Country, False),
    "languages": ("languages.json", Language, False),
    "regions": ("regions.json", Region, False),
    "subdivisions": ("subdivisions.json", Subdivision, False),
    "blocklist": ("blocklist.json", Blocked, False),
}


def load_records(data_dir: Path, name: str):
    filename, model, required = REFERENCE_FILES[name]
    path = Path(data_dir) / filename
    if not path.exists():
        if required:
            raise FileNotFoundError(f"missing reference file {path}")
        log.warning("reference file %s not found, using an empty list", path)
        return []
    return [model.from_dict(row) for row in load_json_records(path)]


def load_reference_data(data_dir: Path) -> ReferenceData:
    data = ReferenceData(**{name: load_records(data_dir, name) for name in REFERENCE_FILES})

    seen = set()
    for channel in data.channels:
        if channel.id in seen:
            raise DataError(f"channels.json: duplicate channel id '{channel.id}'")
        seen.add(channel.id)

    log.info(
        "loaded %d channels, %d categories, %d languages, %d blocked",
        len(data.channels), len(data.categories), len(data.languages), len(data.blocklist),
    )
    return data


STREAM_COLUMNS = ("channel", "name", "url", "logo", "group_title",
                  "http_referrer", "user_agent", "filepath", "line")


class StreamDatabase:
    """Thin sqlite3 wrapper holding raw stream rows before reconciliation."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        con = sqlite3.connect(self.db_path)
        con.row_factory = sqlite3.Row
        return con

    def _init_db(self) -> None:
        con = self._connect()
        try:
            con.executescript(
                """
                CREATE TABLE IF NOT EXISTS streams (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    channel TEXT,
                    name TEXT,
                    url TEXT NOT NULL,
                    logo TEXT,
                    group_title TEXT,
                    http_referrer TEXT,
                    user_agent TEXT,
                    filepath TEXT,
                    line INTEGER NOT NULL DEFAULT 0
                );

                CREATE INDEX IF NOT EXISTS idx_streams_channel ON streams(channel);
                """
            )
            con.commit()
        finally:
            con.close()

    def clear(self) -> None:
        con = self._connect()
        try:
            con.execute("DELETE FROM streams")
            con.commit()
        finally:
            con.close()

    def insert(self, streams: Iterable[Stream]) -> int:
        rows = [tuple(s.to_row()[c] for c in STREAM_COLUMNS) for s in streams]
        placeholders = ", ".join("?" for _ in STREAM_COLUMNS)
        con = self._connect()
        try:
            con.executemany(
                f"INSERT INTO streams ({', '.join(STREAM_COLUMNS)}) VALUES ({placeholders})",
                rows,
            )
            con.commit()
        finally:
            con.close()
        return len(rows)

    def find_all(self) -> List[Stream]:
        con = self._connect()
        try:
            cur = con.execute(f"SELECT {', '.join(STREAM_COLUMNS)} FROM streams ORDER BY id")
            return [Stream.from_dict(dict(row)) for row in cur.fetchall()]
        finally:
            con.close()

    def count(self) -> int:
        con = self._connect()
        try:
            return con.execute("SELECT COUNT(*) FROM streams").fetchone()[0]
        finally:
            con.close()
