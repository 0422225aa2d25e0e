"""Win-rate tiers used by the leaderboard and balanced pairing."""

from __future__ import annotations

from typing import Optional

from shuttlebook.core.constants import TIER_BRONZE, TIER_RANK, TIER_THRESHOLDS


def classify_tier(win_rate: float) -> str:
    """Map a win-rate percentage to its tier, checking the highest tier first.

    Values outside 0-100 are not clamped.
    """
    for tier, minimum in TIER_THRESHOLDS:
        if win_rate >= minimum:
            return tier
    return TIER_BRONZE


def tier_rank(tier: Optional[str]) -> int:
    """Numeric strength of a tier; 0 for unknown or missing tiers."""
    if not tier:
        return 0
    return TIER_RANK.get(tier, 0)
