"""Service for the monthly master-player leaderboard."""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Optional, TypedDict

from shuttlebook.core.constants import UNKNOWN_PLAYER_NAME

from .tiers import classify_tier

if TYPE_CHECKING:
    from shuttlebook.session.models import ParticipationRecord
    from shuttlebook.session.stores import ParticipationStore, PlayerStore


class LeaderboardEntry(TypedDict):
    """One ranked master player for a month."""

    playerId: str
    name: str
    wins: int
    losses: int
    total: int
    sessions: int
    winRate: float
    tier: str


def _month_and_year(session_date: Any) -> Optional[tuple[int, int]]:
    """Pull (month, year) out of a ``YYYY-MM-DD`` string or a date object."""
    if not session_date:
        return None
    if isinstance(session_date, (datetime.date, datetime.datetime)):
        return session_date.month, session_date.year
    parts = str(session_date).split("-")
    if len(parts) < 2:
        return None
    try:
        return int(parts[1]), int(parts[0])
    except ValueError:
        return None


def _accumulate(
    records: Iterable[ParticipationRecord], month: int, year: int
) -> dict[str, dict[str, int]]:
    """Sum wins and losses and count sessions per master player."""
    stats: dict[str, dict[str, int]] = {}
    for record in records:
        player_id = record.get("playerId")
        if not player_id:
            continue
        if _month_and_year(record.get("sessionDate")) != (month, year):
            continue

        s = stats.setdefault(player_id, {"wins": 0, "losses": 0, "sessions": 0})
        s["wins"] += record.get("wins") or 0
        s["losses"] += record.get("losses") or 0
        s["sessions"] += 1
    return stats


def win_rate(wins: int, losses: int) -> float:
    """Win percentage rounded to one decimal, 0 when nothing was played."""
    total = wins + losses
    return round(wins / total * 100, 1) if total > 0 else 0.0


def aggregate_leaderboard(
    records: Iterable[ParticipationRecord],
    month: int,
    year: int,
    player_names: Optional[Mapping[str, str]] = None,
) -> list[LeaderboardEntry]:
    """Rank master players for one calendar month by win rate.

    Temporary participants (no ``playerId``) and records from other months
    are ignored. Ties keep their first-seen order.
    """
    player_names = player_names or {}
    leaderboard: list[LeaderboardEntry] = []
    for player_id, s in _accumulate(records, month, year).items():
        rate = win_rate(s["wins"], s["losses"])
        leaderboard.append(
            {
                "playerId": player_id,
                "name": player_names.get(player_id) or UNKNOWN_PLAYER_NAME,
                "wins": s["wins"],
                "losses": s["losses"],
                "total": s["wins"] + s["losses"],
                "sessions": s["sessions"],
                "winRate": rate,
                "tier": classify_tier(rate),
            }
        )

    leaderboard.sort(key=lambda entry: entry["winRate"], reverse=True)
    return leaderboard


class LeaderboardService:
    """Reads participation data from the stores and ranks it."""

    def __init__(self, players: PlayerStore, participations: ParticipationStore):
        self.players = players
        self.participations = participations

    def get_monthly_leaderboard(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        today: Optional[datetime.date] = None,
    ) -> dict[str, Any]:
        """Build the leaderboard for a month, defaulting to the current one."""
        today = today or datetime.date.today()
        target_month = month or today.month
        target_year = year or today.year

        records = self.participations.list_all_records()
        names = {p["id"]: p.get("name", "") for p in self.players.list()}
        return {
            "month": target_month,
            "year": target_year,
            "leaderboard": aggregate_leaderboard(
                records, target_month, target_year, names
            ),
        }

    def get_tier_map(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        today: Optional[datetime.date] = None,
    ) -> dict[str, str]:
        """Map player id to tier for the given (or current) month."""
        board = self.get_monthly_leaderboard(month, year, today)
        return {entry["playerId"]: entry["tier"] for entry in board["leaderboard"]}
