import shutil

from functions.config import cfg_path
from functions.m3u import write_m3u
from functions.paths import archive_previous

def write_outputs(playlists, cfg):
    """playlists: relative file name -> ordered streams. Returns name -> count."""
    outputs = cfg_path(cfg, "outputs_dir")
    if archive_previous(outputs, cfg_path(cfg, "archive_dir")):
        # stale group files must not survive a regeneration
        shutil.rmtree(outputs)
    return {name: write_m3u(streams, outputs / name) for name, streams in playlists.items()}
