#!/usr/bin/env python3
# ==============================================================================
# [FILE]     src/validate_playlists.py
# [PROJECT]  ChannelLedger
# [ROLE]     Validate playlists against the channel catalog and blocklist
# [VERSION]  v1.0
# [UPDATED]  2026-10-19
# ==============================================================================

"""
ChannelLedger — Validate Playlists

Purpose
- Parse every playlist under the streams directory (or the files given on the
  command line) and report, per file:
    warning  channel id not in channels.json
    warning  url already seen earlier in the same file
    error    declared or derived channel id on the blocklist
    error    playlist could not be parsed (line 0)

Exit Behavior
- 0 when no errors were found (warnings are allowed)
- 1 when at least one error was found in any file
- A broken file never stops the run; the remaining files are still checked.

Usage
    python -m src.validate_playlists
    python -m src.validate_playlists streams/us.m3u streams/fr_news.m3u
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set

from functions.blocklist import find_blocked
from functions.channel_id import generate_channel_id
from functions.config import cfg_path, load_config
from functions.m3u import ParseError, parse_playlist
from functions.models import Blocked, Channel, LogItem
from functions.paths import country_code_from_filename, extension_of, list_playlists
from functions.storage import load_records

log = logging.getLogger(__name__)


class Colors:
    RESET = "\033[0m"
    UNDERLINE = "\033[4m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GRAY = "\033[90m"


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{Colors.RESET}" if enabled else text


@dataclass
class FileReport:
    filepath: str
    log: List[LogItem] = field(default_factory=list)


@dataclass
class ValidationResult:
    files: List[FileReport] = field(default_factory=list)

    def _count(self, kind: str) -> int:
        return sum(1 for f in self.files for item in f.log if item.type == kind)

    @property
    def errors(self) -> int:
        return self._count("error")

    @property
    def warnings(self) -> int:
        return self._count("warning")

    @property
    def problems(self) -> int:
        return self.errors + self.warnings

    @property
    def failed(self) -> bool:
        return self.errors > 0


def resolve_playlist(filepath: str, streams_dir: Path) -> Path:
    path = Path(filepath)
    if path.is_absolute():
        return path
    candidate = Path(streams_dir) / path
    return candidate if candidate.exists() or not path.exists() else path


def validate_file(
    filepath: str,
    channel_ids: Set[str],
    blocklist: Sequence[Blocked],
    streams_dir: Path,
) -> List[LogItem]:
    country_code = country_code_from_filename(filepath) or ""
    items: List[LogItem] = []

    try:
        playlist = parse_playlist(resolve_playlist(filepath, streams_dir))
    except (ParseError, OSError) as e:
        return [LogItem("error", 0, str(e).lower())]

    seen_urls: Set[str] = set()
    for stream in playlist.streams:
        if stream.channel and stream.channel not in channel_ids:
            items.append(LogItem("warning", stream.line, f'"{stream.channel}" is not in the database'))

        if stream.url and stream.url in seen_urls:
            items.append(LogItem("warning", stream.line, f'"{stream.url}" is already on the playlist'))
        else:
            seen_urls.add(stream.url)

        derived_id = generate_channel_id(stream.name, country_code)
        blocked = find_blocked(blocklist, stream.channel, derived_id)
        if blocked:
            items.append(
                LogItem(
                    "error",
                    stream.line,
                    f'"{stream.name}" is on the blocklist due to claims of copyright holders ({blocked.ref})',
                )
            )

    return items


def validate_playlists(
    filepaths: Iterable[str],
    channels: Iterable[Channel],
    blocklist: Sequence[Blocked],
    streams_dir: Path,
    extension: str = "m3u",
) -> ValidationResult:
    channel_ids = {c.id for c in channels}
    result = ValidationResult()
    for filepath in filepaths:
        if extension_of(filepath) != extension:
            continue
        items = validate_file(filepath, channel_ids, blocklist, streams_dir)
        if items:
            result.files.append(FileReport(filepath=filepath, log=items))
    return result


def format_report(result: ValidationResult, color: bool = True) -> List[str]:
    lines: List[str] = []
    for report in result.files:
        lines.append("")
        lines.append(_paint(report.filepath, Colors.UNDERLINE, color))
        for item in report.log:
            position = str(item.line).ljust(6)[:6]
            kind = item.type.ljust(9)[:9]
            status = _paint(kind, Colors.RED if item.type == "error" else Colors.YELLOW, color)
            lines.append(f" {_paint(position, Colors.GRAY, color)}{status}{item.message}")
    lines.append("")
    lines.append(
        _paint(
            f"{result.problems} problems ({result.errors} errors, {result.warnings} warnings)",
            Colors.RED,
            color,
        )
    )
    return lines


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Validate playlists against the channel catalog and blocklist.")
    ap.add_argument("filepath", nargs="*", help="Path to file(s) to validate (default: every playlist)")
    ap.add_argument("--config", help="Path to channelledger.yml")
    ap.add_argument("--no-color", action="store_true", help="Disable colored output")
    return ap


def run(cfg: dict, filepaths: Optional[List[str]] = None, color: bool = True) -> int:
    data_dir = cfg_path(cfg, "data_dir")
    streams_dir = cfg_path(cfg, "streams_dir")
    extension = cfg.get("playlist", {}).get("extension", "m3u")

    log.info("loading blocklist...")
    channels = load_records(data_dir, "channels")
    blocklist = load_records(data_dir, "blocklist")
    log.info("found %d records", len(blocklist))

    files = filepaths or [str(streams_dir / p) for p in list_playlists(streams_dir, extension)]
    result = validate_playlists(files, channels, blocklist, streams_dir, extension)

    lines = format_report(result, color=color)
    for line in lines[:-1]:
        print(line)
    print(lines[-1], file=sys.stderr)

    return 1 if result.failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    args = build_parser().parse_args(argv)
    cfg = load_config(args.config)
    color = not args.no_color and sys.stdout.isatty()
    return run(cfg, args.filepath, color=color)


if __name__ == "__main__":
    raise SystemExit(main())
