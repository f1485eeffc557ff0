#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/http.py
# [PROJECT] ChannelLedger
# [ROLE] HTTP fetch with cache for reference data files
# [VERSION] v2.0
# [UPDATED] 2026-10-19
# ==============================================================================

import requests
from pathlib import Path

def fetch(url: str, cache_file: Path, user_agent: str = None, timeout: int = 30, force: bool = False):
    cache_file = Path(cache_file)
    cache_file.parent.mkdir(parents=True, exist_ok=True)
    if cache_file.exists() and cache_file.stat().st_size > 0 and not force:
        return str(cache_file)
    headers = {"User-Agent": user_agent or "ChannelLedger/1.0"}
    response = requests.get(url, timeout=timeout, headers=headers)
    response.raise_for_status()
    cache_file.write_bytes(response.content)
    return str(cache_file)
