#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/index.py
# [PROJECT] ChannelLedger
# [ROLE] Read-only lookups over channels, categories and languages
# [VERSION] v1.0
# [UPDATED] 2026-10-19
# ==============================================================================

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from functions.collection import key_by
from functions.models import Category, Channel, Language


class ChannelIndex:
    """Built once per run; a missing key returns None rather than raising."""

    def __init__(
        self,
        channels: Mapping[str, Channel],
        categories: Mapping[str, Category],
        languages: Mapping[str, Language],
    ):
        self._channels = MappingProxyType(dict(channels))
        self._categories = MappingProxyType(dict(categories))
        self._languages = MappingProxyType(dict(languages))

    @classmethod
    def build(
        cls,
        channels: Iterable[Channel],
        categories: Iterable[Category] = (),
        languages: Iterable[Language] = (),
    ) -> "ChannelIndex":
        return cls(
            key_by(channels, lambda c: c.id),
            key_by(categories, lambda c: c.id),
            key_by(languages, lambda lang: lang.code),
        )

    def channel(self, channel_id: Optional[str]) -> Optional[Channel]:
        if not channel_id:
            return None
        return self._channels.get(channel_id)

    def has_channel(self, channel_id: Optional[str]) -> bool:
        return self.channel(channel_id) is not None

    def category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def language(self, code: str) -> Optional[Language]:
        return self._languages.get(code)

    def __len__(self) -> int:
        return len(self._channels)
