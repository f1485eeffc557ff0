#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/channel_id.py
# [PROJECT] ChannelLedger
# [ROLE] Derive catalog-style channel ids from display names
# [VERSION] v1.0
# [UPDATED] 2026-10-19
# ==============================================================================

import re

from unidecode import unidecode

PARENS_RX = re.compile(r" *\([^)]*\) *")
BRACKETS_RX = re.compile(r" *\[[^\]]*\] *")
NON_ALNUM_RX = re.compile(r"[^A-Za-z0-9]+")


def generate_channel_id(name: str, code: str) -> str:
    """
    "RT (Arabic)", "fr" -> "RT.fr"; "Al Jazeera+", "qa" -> "AlJazeeraPlus.qa".

    Returns "" when either argument is empty. Blocklist matching relies on
    these ids, so the normalization order below must not change.
    """
    if not name or not code:
        return ""

    name = PARENS_RX.sub("", name)
    name = BRACKETS_RX.sub("", name)
    name = name.replace("+", "Plus")
    name = NON_ALNUM_RX.sub("", name)
    name = name.strip()
    name = unidecode(name)
    code = code.lower()

    return f"{name}.{code}"
