import logging

from functions.config import cfg_path
from functions.http import fetch

log = logging.getLogger(__name__)


def download_all(cfg, force=False):
    api = cfg["api"]
    data_dir = cfg_path(cfg, "data_dir")
    files = []

    for name in api["files"]:
        url = f"{api['base_url'].rstrip('/')}/{name}"
        log.info("downloading %s", url)
        files.append(fetch(url, data_dir / name, user_agent=api.get("user_agent"),
                           timeout=int(api.get("timeout_sec", 30)), force=force))

    return files
