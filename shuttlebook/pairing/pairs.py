"""Split a session roster into doubles pairs."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Optional

from shuttlebook.core.constants import TIER_BRONZE
from shuttlebook.ranking.tiers import tier_rank

if TYPE_CHECKING:
    from shuttlebook.session.models import Participant

Pair = tuple["Participant", ...]


def _chunk_pairs(ordered: Sequence[Participant]) -> list[Pair]:
    """Take participants two at a time; an odd one out stands alone."""
    return [tuple(ordered[i : i + 2]) for i in range(0, len(ordered), 2)]


def generate_random_pairs(
    participants: Sequence[Participant], rng: Optional[random.Random] = None
) -> list[Pair]:
    """Shuffle a copy of the roster and pair it off consecutively."""
    shuffled = list(participants)
    (rng or random).shuffle(shuffled)
    return _chunk_pairs(shuffled)


def generate_balanced_pairs(participants: Sequence[Participant]) -> list[Pair]:
    """Pair the strongest with the weakest, working inwards.

    Participants are stably sorted by tier (untiered last), then position
    ``i`` is paired with ``n - 1 - i``. With an odd roster the middle
    participant is appended as a singleton.
    """
    ranked = sorted(participants, key=lambda p: tier_rank(p.tier), reverse=True)
    n = len(ranked)
    pairs: list[Pair] = [(ranked[i], ranked[n - 1 - i]) for i in range(n // 2)]
    if n % 2:
        pairs.append((ranked[n // 2],))
    return pairs


def annotate_tiers(
    participants: Sequence[Participant], tier_map: Mapping[str, str]
) -> list[Participant]:
    """Copy the roster with tiers attached.

    Masters missing from ``tier_map`` rank as Bronze; temporary players get
    no tier.
    """
    return [
        p.with_tier(tier_map.get(p.player_ref, TIER_BRONZE) if p.is_master else None)
        for p in participants
    ]


def pairs_for_roster(
    participants: Sequence[Participant],
    tier_lookup: Callable[[], Mapping[str, str]],
    rng: Optional[random.Random] = None,
) -> list[Pair]:
    """Tier-balanced pairs, or random pairs if tiers cannot be loaded."""
    try:
        tier_map = tier_lookup()
    except Exception as e:
        logging.warning(f"Tier lookup failed, falling back to random pairs: {e}")
        return generate_random_pairs(participants, rng)
    return generate_balanced_pairs(annotate_tiers(participants, tier_map))
