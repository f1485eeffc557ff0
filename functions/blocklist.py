#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/blocklist.py
# [PROJECT] ChannelLedger
# [ROLE] Legal-hold lookup for declared and derived channel ids
# [VERSION] v1.0
# [UPDATED] 2026-10-19
# ==============================================================================

from typing import Iterable, Optional

from functions.models import Blocked


def find_blocked(
    blocklist: Iterable[Blocked],
    channel_id: Optional[str],
    derived_id: Optional[str],
) -> Optional[Blocked]:
    """First entry matching the declared or the derived id, case-insensitively."""
    candidates = {c.lower() for c in (channel_id, derived_id) if c}
    if not candidates:
        return None
    for blocked in blocklist:
        if blocked.channel.lower() in candidates:
            return blocked
    return None
