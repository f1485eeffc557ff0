#!/usr/bin/env python3
# ==============================================================================
# [FILE] src/reconcile.py
# [PROJECT] ChannelLedger
# [ROLE] Merge raw stream rows with channel metadata, sort and dedupe
# [VERSION] v1.0
# [UPDATED] 2026-10-19
# ==============================================================================

"""
Reconciliation (generation path)

Steps
- order streams by (channel, url); channel-less streams go last
- keep the first stream per channel; channel-less streams are never merged
- backfill categories, languages, broadcast area, nsfw flag and logo from the
  matching channel, or default the broadcast area from the playlist file name

Nothing here raises on a missing match: playlists may carry channels that are
not in the catalog yet.
"""

from __future__ import annotations

import itertools
from typing import Iterable, List

from functions.collection import order_by, uniq_by
from functions.index import ChannelIndex
from functions.models import Stream
from functions.paths import country_code_from_filename


def default_broadcast_area(filepath: str) -> List[str]:
    code = country_code_from_filename(filepath)
    return [f"c/{code.upper()}"] if code else []


def dedupe_streams(streams: Iterable[Stream]) -> List[Stream]:
    # tokens are scoped to this call; ("stream", n) can never equal ("channel", id)
    counter = itertools.count()

    def identity(stream: Stream):
        if stream.channel:
            return ("channel", stream.channel)
        return ("stream", next(counter))

    return uniq_by(streams, identity)


def enrich_stream(stream: Stream, index: ChannelIndex) -> Stream:
    channel = index.channel(stream.channel)
    if channel is None:
        stream.broadcast_area = default_broadcast_area(stream.filepath)
        return stream

    stream.categories = [c for c in (index.category(i) for i in channel.categories) if c]
    stream.languages = [lang for lang in (index.language(i) for i in channel.languages) if lang]
    stream.broadcast_area = list(channel.broadcast_area)
    stream.is_nsfw = channel.is_nsfw
    if channel.logo:
        stream.logo = channel.logo
    return stream


def reconcile_streams(streams: Iterable[Stream], index: ChannelIndex) -> List[Stream]:
    ordered = order_by(streams, [lambda s: s.channel, lambda s: s.url])
    return [enrich_stream(s, index) for s in dedupe_streams(ordered)]
