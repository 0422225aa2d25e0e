"""Order pair-vs-pair matches for a session."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from itertools import combinations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shuttlebook.session.models import Participant

    from .pairs import Pair


@dataclass(frozen=True)
class ScheduledMatch:
    """Two pairs meeting on court, with a round label for display."""

    pair_a: Pair
    pair_b: Pair
    pair_a_index: int
    pair_b_index: int
    round: int


def schedule_without_back_to_back(pairs: Sequence[Pair]) -> list[ScheduledMatch]:
    """Greedy round-robin ordering that tries to rest pairs between games.

    Every two pairs meet once. Matches are taken in generation order,
    skipping any that involve a pair from the match just scheduled. When
    every remaining match does, the first remaining one is taken anyway.
    This is a best-effort heuristic: back-to-back games only happen when no
    remaining match avoids them, which is common for small or odd counts.

    ``round`` groups matches into batches of ``ceil(n / 2)``; it is a label,
    not a guarantee that a pair plays once per round.
    """
    n = len(pairs)
    if n < 2:
        return []

    remaining = list(combinations(range(n), 2))
    batch_size = max(1, math.ceil(n / 2))
    schedule: list[ScheduledMatch] = []
    just_played: set[int] = set()

    while remaining:
        pick = next(
            (c for c in remaining if not just_played.intersection(c)),
            remaining[0],
        )
        remaining.remove(pick)
        i, j = pick
        schedule.append(
            ScheduledMatch(
                pair_a=pairs[i],
                pair_b=pairs[j],
                pair_a_index=i,
                pair_b_index=j,
                round=len(schedule) // batch_size + 1,
            )
        )
        just_played = {i, j}

    return schedule


def match_counts(
    participants: Iterable[Participant], schedule: Iterable[ScheduledMatch]
) -> dict[str, int]:
    """How many scheduled matches each participant plays, by participant id."""
    counts = {p.participant_id: 0 for p in participants}
    for match in schedule:
        for p in (*match.pair_a, *match.pair_b):
            counts[p.participant_id] = counts.get(p.participant_id, 0) + 1
    return counts


def average_matches_per_player(counts: dict[str, int]) -> float:
    """Mean of a match-count tally, 0 for an empty roster."""
    if not counts:
        return 0.0
    return sum(counts.values()) / len(counts)
