#!/usr/bin/env python3
# ==============================================================================
# [FILE] src/run_pipeline.py
# [PROJECT] ChannelLedger
# [ROLE] Main entrypoint - orchestrate full pipeline
# [VERSION] v2.0
# [UPDATED] 2026-10-19
# ==============================================================================

import logging
import sys

from functions.config import load_config
from src.download_sources import download_all
from src.generate_playlists import generate_playlists, setup_generators_log
from src.parse_m3u import build_database
from src.validate_playlists import run as validate_run

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

def run(cfg) -> int:
    logging.info("Pipeline started")

    if cfg.get("api", {}).get("enabled"):
        download_all(cfg)

    build_database(cfg)

    rc = validate_run(cfg, color=sys.stdout.isatty())
    if rc != 0:
        logging.error("Validation failed, playlists not generated")
        return rc

    setup_generators_log(cfg)
    counts = generate_playlists(cfg)
    logging.info(f"Pipeline complete: {len(counts)} playlists")
    return 0

def main() -> int:
    cfg = load_config()
    try:
        return run(cfg)
    except Exception as e:
        logging.error("FATAL: %s: %s", type(e).__name__, e)
        return 2

if __name__ == "__main__":
    raise SystemExit(main())
