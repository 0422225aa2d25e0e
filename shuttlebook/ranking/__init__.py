"""Monthly rankings and win-rate tiers."""

from .leaderboard import LeaderboardService, aggregate_leaderboard, win_rate
from .tiers import classify_tier, tier_rank

__all__ = [
    "LeaderboardService",
    "aggregate_leaderboard",
    "classify_tier",
    "tier_rank",
    "win_rate",
]
