import logging

from functions.config import cfg_path
from functions.m3u import ParseError, parse_playlist
from functions.paths import list_playlists
from functions.storage import StreamDatabase

log = logging.getLogger(__name__)


def build_database(cfg) -> StreamDatabase:
    streams_dir = cfg_path(cfg, "streams_dir")
    extension = cfg.get("playlist", {}).get("extension", "m3u")

    db = StreamDatabase(cfg_path(cfg, "database"))
    db.clear()

    for filepath in list_playlists(streams_dir, extension):
        try:
            playlist = parse_playlist(filepath, base_dir=streams_dir)
        except ParseError as e:
            log.warning("skipping %s: %s", filepath, e)
            continue
        db.insert(playlist.streams)

    log.info("stream database: %d rows", db.count())
    return db
