#!/usr/bin/env python3
# ==============================================================================
# [FILE]     src/generate_playlists.py
# [PROJECT]  ChannelLedger
# [ROLE]     Build grouped playlists from the reconciled stream list
# [VERSION]  v1.0
# [UPDATED]  2026-10-19
# ==============================================================================

"""
ChannelLedger — Generate Playlists

Inputs
- data/*.json reference files
- database/streams.db (filled by src/parse_m3u.py)

Outputs (under outputs/)
- index.m3u, index.nsfw.m3u
- index.category.m3u, index.language.m3u, index.country.m3u, index.region.m3u
  (one entry per stream and group, group-title set to the group name)
- categories/<id>.m3u, languages/<code>.m3u, countries/<code>.m3u, regions/<code>.m3u
  plus an undefined.m3u in each folder except regions/
- logs/generators.log with per-file stream counts

NSFW streams only appear in index.nsfw.m3u.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Set, Tuple

from functions.collection import group_by, key_by, order_by
from functions.config import cfg_path, load_config
from functions.index import ChannelIndex
from functions.models import Region, Stream, Subdivision
from functions.storage import ReferenceData, StreamDatabase, load_reference_data
from src.reconcile import reconcile_streams
from src.write_outputs import write_outputs

log = logging.getLogger(__name__)
generators_log = logging.getLogger("generators")


def by_name(streams: List[Stream]) -> List[Stream]:
    return order_by(streams, [lambda s: s.name, lambda s: s.url])


def area_countries(
    area: List[str],
    regions: Dict[str, Region],
    subdivisions: Dict[str, Subdivision],
) -> Set[str]:
    """Country codes covered by broadcast area tags like c/FR, r/EUR, s/US-CA."""
    out: Set[str] = set()
    for tag in area:
        kind, _, code = tag.partition("/")
        if kind == "c":
            out.add(code)
        elif kind == "r" and code in regions:
            out.update(regions[code].countries)
        elif kind == "s":
            sub = subdivisions.get(code)
            out.add(sub.country if sub else code.split("-")[0])
    return out


def grouped_index(groups: List[Tuple[str, List[Stream]]], undefined: List[Stream]) -> List[Tuple[Stream, str]]:
    """Each stream once per group it belongs to, groups ordered by title, Undefined last."""
    entries: List[Tuple[Stream, str]] = []
    for title, members in sorted(groups, key=lambda g: g[0]):
        entries.extend((s, title) for s in members)
    entries.extend((s, "Undefined") for s in undefined)
    return entries


def build_playlists(streams: List[Stream], ref: ReferenceData) -> Dict[str, list]:
    regions = key_by(ref.regions, lambda r: r.code)
    subdivisions = key_by(ref.subdivisions, lambda s: s.code)
    sfw = by_name([s for s in streams if not s.is_nsfw])

    playlists: Dict[str, list] = {
        "index.m3u": sfw,
        "index.nsfw.m3u": by_name(streams),
    }

    category_groups = []
    for category in ref.categories:
        matched = [s for s in sfw if any(c.id == category.id for c in s.categories)]
        playlists[f"categories/{category.id}.m3u"] = matched
        if matched:
            category_groups.append((category.name or category.id, matched))
    no_category = [s for s in sfw if not s.categories]
    playlists["categories/undefined.m3u"] = no_category

    language_groups = []
    languages = group_by((lang for s in sfw for lang in s.languages), lambda lang: lang.code)
    for code in sorted(languages):
        matched = [s for s in sfw if any(lang.code == code for lang in s.languages)]
        playlists[f"languages/{code}.m3u"] = matched
        language_groups.append((languages[code][0].name or code, matched))
    no_language = [s for s in sfw if not s.languages]
    playlists["languages/undefined.m3u"] = no_language

    country_groups = []
    covered = {id(s): area_countries(s.broadcast_area, regions, subdivisions) for s in sfw}
    for country in ref.countries:
        matched = [s for s in sfw if country.code in covered[id(s)]]
        if matched:
            playlists[f"countries/{country.code.lower()}.m3u"] = matched
            country_groups.append((country.name or country.code, matched))
    no_area = [s for s in sfw if not s.broadcast_area]
    playlists["countries/undefined.m3u"] = no_area

    region_groups = []
    for region in ref.regions:
        members = set(region.countries)
        matched = [
            s for s in sfw
            if f"r/{region.code}" in s.broadcast_area or covered[id(s)] & members
        ]
        if matched:
            playlists[f"regions/{region.code.lower()}.m3u"] = matched
            region_groups.append((region.name or region.code, matched))

    playlists["index.category.m3u"] = grouped_index(category_groups, no_category)
    playlists["index.language.m3u"] = grouped_index(language_groups, no_language)
    playlists["index.country.m3u"] = grouped_index(country_groups, no_area)
    playlists["index.region.m3u"] = grouped_index(region_groups, no_area)

    return playlists


def generate_playlists(cfg: dict) -> Dict[str, int]:
    ref = load_reference_data(cfg_path(cfg, "data_dir"))
    index = ChannelIndex.build(ref.channels, ref.categories, ref.languages)

    raw = StreamDatabase(cfg_path(cfg, "database")).find_all()
    streams = reconcile_streams(raw, index)
    log.info("reconciled %d of %d streams", len(streams), len(raw))

    counts = write_outputs(build_playlists(streams, ref), cfg)
    for name, n in counts.items():
        generators_log.info("%s: %d streams", name, n)
    return counts


def setup_generators_log(cfg: dict) -> None:
    logs_dir = cfg_path(cfg, "logs_dir")
    logs_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(logs_dir / "generators.log", mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    for old in list(generators_log.handlers):
        generators_log.removeHandler(old)
        old.close()
    generators_log.addHandler(handler)
    generators_log.setLevel(logging.INFO)
    generators_log.propagate = False


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    cfg = load_config()
    setup_generators_log(cfg)
    counts = generate_playlists(cfg)
    logging.info("Generated %d playlists", len(counts))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
