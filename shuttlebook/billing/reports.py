"""Session reports with per-player payables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from shuttlebook.core.constants import (
    DEFAULT_PER_MATCH_REWARD,
    REPORT_DAILY,
    REPORT_RANGE,
)
from shuttlebook.errors import ValidationError

from .payables import compute_payable, total_receivable

if TYPE_CHECKING:
    from shuttlebook.session.models import Session
    from shuttlebook.session.stores import ParticipationStore, SessionStore


def _select_sessions(
    sessions: SessionStore,
    kind: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
) -> list[Session]:
    """Pick the sessions a report covers."""
    if kind == REPORT_DAILY:
        if not start_date:
            raise ValidationError("A daily report needs a date.")
        session = sessions.find_by_date(start_date)
        return [session] if session else []
    if kind == REPORT_RANGE:
        if not start_date or not end_date:
            raise ValidationError("A range report needs a start and an end date.")
        return sessions.list_between(start_date, end_date)
    return sessions.list_all()


def build_report(
    sessions: SessionStore,
    participations: ParticipationStore,
    kind: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> list[dict[str, Any]]:
    """Build a report of sessions with their players and receivables.

    ``kind`` is ``daily`` (one date), ``range`` (inclusive dates) or anything
    else for every session.
    """
    report = []
    for session in _select_sessions(sessions, kind, start_date, end_date):
        reward = session.get("perMatchReward")
        if reward is None:
            reward = DEFAULT_PER_MATCH_REWARD
        players = participations.list(session["id"])
        report.append(
            {
                "session": session,
                "players": [
                    {
                        "participant": p,
                        "payable": compute_payable(p, reward),
                    }
                    for p in players
                ],
                "totalReceivable": total_receivable(players, reward),
            }
        )
    return report
