"""Random and tier-balanced pairing plus match scheduling."""

from .pairs import (
    Pair,
    annotate_tiers,
    generate_balanced_pairs,
    generate_random_pairs,
    pairs_for_roster,
)
from .schedule import (
    ScheduledMatch,
    average_matches_per_player,
    match_counts,
    schedule_without_back_to_back,
)

__all__ = [
    "Pair",
    "ScheduledMatch",
    "annotate_tiers",
    "average_matches_per_player",
    "generate_balanced_pairs",
    "generate_random_pairs",
    "match_counts",
    "pairs_for_roster",
    "schedule_without_back_to_back",
]
