#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/m3u.py
# [PROJECT] ChannelLedger
# [ROLE] M3U parsing and rendering helpers
# [VERSION] v2.0
# [UPDATED] 2026-10-19
# ==============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from functions.models import Stream

ATTR_RX = re.compile(r'([\w-]+)="([^"]*)"')
VLC_OPT_RX = re.compile(r"^#EXTVLCOPT:(http-referrer|http-user-agent)=(.*)$")


class ParseError(ValueError):
    """Playlist that breaks the #EXTM3U / #EXTINF / URL structure."""


@dataclass
class Playlist:
    filepath: str
    streams: List[Stream] = field(default_factory=list)


def _split_extinf(info: str) -> tuple:
    """Split the text after '#EXTINF:' into (attribute part, display name).

    The name starts after the first comma that is not inside a quoted value.
    """
    in_quotes = False
    for i, char in enumerate(info):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            return info[:i], info[i + 1:].strip()
    return info, ""


def parse_extinf(line: str) -> Dict[str, Optional[str]]:
    attr_part, name = _split_extinf(line[len("#EXTINF:"):])
    attrs = {k.lower(): (v.strip() or None) for k, v in ATTR_RX.findall(attr_part)}
    return {
        "name": name,
        "channel": attrs.get("tvg-id"),
        "logo": attrs.get("tvg-logo"),
        "group_title": attrs.get("group-title"),
        "user_agent": attrs.get("user-agent"),
        "http_referrer": attrs.get("http-referrer"),
    }


def read_entries(text: str, filepath: str = "") -> List[Stream]:
    lines = text.splitlines()
    first = next((ln.strip() for ln in lines if ln.strip()), "")
    if not first.startswith("#EXTM3U"):
        raise ParseError("Playlist is not valid")

    streams: List[Stream] = []
    current: Optional[Dict[str, Optional[str]]] = None
    current_line = 0
    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#EXTM3U"):
            continue
        if line.startswith("#EXTINF:"):
            if current is not None:
                raise ParseError(f"Missing stream url for directive on line {current_line}")
            current = parse_extinf(line)
            current_line = number
            continue
        if line.startswith("#"):
            opt = VLC_OPT_RX.match(line)
            if opt and current is not None:
                key = "http_referrer" if opt.group(1) == "http-referrer" else "user_agent"
                current[key] = current.get(key) or opt.group(2).strip() or None
            continue
        if current is None:
            raise ParseError(f"Stream url on line {number} has no #EXTINF directive")
        streams.append(Stream(url=line, filepath=filepath, line=current_line, **current))
        current = None

    if current is not None:
        raise ParseError(f"Missing stream url for directive on line {current_line}")
    return streams


def parse_playlist(filepath: str, base_dir: Optional[Path] = None) -> Playlist:
    """Read a playlist (relative to base_dir when given) into ordered streams."""
    path = Path(base_dir) / filepath if base_dir else Path(filepath)
    text = path.read_text(encoding="utf-8", errors="ignore")
    return Playlist(filepath=str(filepath), streams=read_entries(text, str(filepath)))


def render_stream(stream: Stream, group: Optional[str] = None) -> str:
    if not group:
        if stream.categories:
            group = ";".join(c.name or c.id for c in stream.categories)
        else:
            group = "Undefined"
    info = f'#EXTINF:-1 tvg-id="{stream.channel or ""}" tvg-logo="{stream.logo or ""}" group-title="{group}"'
    if stream.user_agent:
        info += f' user-agent="{stream.user_agent}"'
    if stream.http_referrer:
        info += f' http-referrer="{stream.http_referrer}"'
    out = [f"{info},{stream.name}"]
    if stream.http_referrer:
        out.append(f"#EXTVLCOPT:http-referrer={stream.http_referrer}")
    if stream.user_agent:
        out.append(f"#EXTVLCOPT:http-user-agent={stream.user_agent}")
    out.append(stream.url)
    return "\n".join(out)


def write_m3u(streams: Iterable, file_path: Path) -> int:
    """streams: Stream records, or (Stream, group title) pairs for grouped indexes."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    n = 0
    with file_path.open("w", encoding="utf-8") as f:
        f.write("#EXTM3U\n")
        for entry in streams:
            stream, group = entry if isinstance(entry, tuple) else (entry, None)
            f.write(render_stream(stream, group) + "\n")
            n += 1
    return n
