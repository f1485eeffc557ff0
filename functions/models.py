#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/models.py
# [PROJECT] ChannelLedger
# [ROLE] Typed records for streams, channels and reference data
# [VERSION] v1.0
# [UPDATED] 2026-10-19
# ==============================================================================

"""
Records loaded from the reference JSON files and the stream database.

Every record has a `from_dict` constructor that checks required fields at the
load boundary and raises DataError instead of letting half-filled records
travel through the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class DataError(ValueError):
    """Reference data or stream rows that do not have the expected shape."""


def _required(data: Dict[str, Any], key: str, record: str) -> str:
    if not isinstance(data, dict):
        raise DataError(f"{record}: expected an object, got {type(data).__name__}")
    value = data.get(key)
    if value is None or value == "":
        raise DataError(f"{record}: missing required field '{key}'")
    return str(value)


def _optional(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return str(value) if value else None


def _str_list(data: Dict[str, Any], key: str, record: str) -> List[str]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise DataError(f"{record}: field '{key}' must be a list")
    return [str(v) for v in value]


@dataclass(frozen=True)
class Category:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(id=_required(data, "id", "category"), name=data.get("name") or "")


@dataclass(frozen=True)
class Language:
    code: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Language":
        return cls(code=_required(data, "code", "language"), name=data.get("name") or "")


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    languages: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Country":
        return cls(
            code=_required(data, "code", "country"),
            name=data.get("name") or "",
            languages=_str_list(data, "languages", "country"),
        )


@dataclass(frozen=True)
class Region:
    code: str
    name: str
    countries: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Region":
        return cls(
            code=_required(data, "code", "region"),
            name=data.get("name") or "",
            countries=_str_list(data, "countries", "region"),
        )


@dataclass(frozen=True)
class Subdivision:
    code: str
    name: str
    country: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subdivision":
        return cls(
            code=_required(data, "code", "subdivision"),
            name=data.get("name") or "",
            country=_required(data, "country", "subdivision"),
        )


@dataclass(frozen=True)
class Channel:
    id: str
    name: str = ""
    categories: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    broadcast_area: List[str] = field(default_factory=list)
    is_nsfw: bool = False
    logo: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Channel":
        return cls(
            id=_required(data, "id", "channel"),
            name=data.get("name") or "",
            categories=_str_list(data, "categories", "channel"),
            languages=_str_list(data, "languages", "channel"),
            broadcast_area=_str_list(data, "broadcast_area", "channel"),
            is_nsfw=bool(data.get("is_nsfw", False)),
            logo=_optional(data, "logo"),
        )


@dataclass(frozen=True)
class Blocked:
    channel: str
    ref: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Blocked":
        return cls(
            channel=_required(data, "channel", "blocklist"),
            ref=data.get("ref") or "",
        )


@dataclass
class Stream:
    """One playable playlist entry; mutated in place during reconciliation."""
    name: str
    url: str
    channel: Optional[str] = None
    logo: Optional[str] = None
    group_title: Optional[str] = None
    http_referrer: Optional[str] = None
    user_agent: Optional[str] = None
    filepath: str = ""
    line: int = 0
    categories: List[Category] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    broadcast_area: List[str] = field(default_factory=list)
    is_nsfw: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stream":
        line = data.get("line") or 0
        try:
            line = int(line)
        except (TypeError, ValueError):
            raise DataError(f"stream: field 'line' must be an integer, got {line!r}")
        return cls(
            name=data.get("name") or "",
            url=_required(data, "url", "stream"),
            channel=_optional(data, "channel"),
            logo=_optional(data, "logo"),
            group_title=_optional(data, "group_title"),
            http_referrer=_optional(data, "http_referrer"),
            user_agent=_optional(data, "user_agent"),
            filepath=data.get("filepath") or "",
            line=line,
        )

    def to_row(self) -> Dict[str, Any]:
        return {
            "channel": self.channel,
            "name": self.name,
            "url": self.url,
            "logo": self.logo,
            "group_title": self.group_title,
            "http_referrer": self.http_referrer,
            "user_agent": self.user_agent,
            "filepath": self.filepath,
            "line": self.line,
        }


@dataclass(frozen=True)
class LogItem:
    type: str  # "error" | "warning"
    line: int
    message: str
