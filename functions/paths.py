#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/paths.py
# [PROJECT] ChannelLedger
# [ROLE] Path helpers for data, playlists, outputs, archive
# [VERSION] v2.0
# [UPDATED] 2026-10-19
# ==============================================================================

import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

BASE_DIR = Path(__file__).resolve().parent.parent

COUNTRY_PREFIX_RX = re.compile(r"^([a-z]{2})(_|$)")


def resolve_path(value) -> Path:
    path = Path(value)
    return path if path.is_absolute() else BASE_DIR / path


def list_playlists(streams_dir: Path, extension: str = "m3u") -> List[str]:
    """Playlist paths under streams_dir, sorted, relative to streams_dir."""
    streams_dir = Path(streams_dir)
    if not streams_dir.exists():
        return []
    return sorted(p.relative_to(streams_dir).as_posix() for p in streams_dir.rglob(f"*.{extension}"))


def extension_of(filepath: str) -> str:
    return Path(filepath).suffix.lstrip(".").lower()


def country_code_from_filename(filepath: str) -> Optional[str]:
    """'fr_news.m3u' -> 'fr', 'fr.m3u' -> 'fr', 'news.m3u' -> None."""
    if not filepath:
        return None
    m = COUNTRY_PREFIX_RX.match(Path(filepath).stem)
    return m.group(1) if m else None


def archive_previous(outputs: Path, archive_root: Path) -> Optional[Path]:
    outputs = Path(outputs)
    if not outputs.exists() or not any(outputs.iterdir()):
        return None
    archive = Path(archive_root) / datetime.now().strftime("%Y%m%d_%H%M%S")
    for file in outputs.rglob("*"):
        if file.is_file():
            target = archive / file.relative_to(outputs)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy(file, target)
    return archive
