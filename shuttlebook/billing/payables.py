"""Per-participant payables and session money totals."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from shuttlebook.session.models import Participant


class SessionSummary(TypedDict):
    """Money totals shown for a session."""

    totalWins: int
    totalLosses: int
    totalFees: float
    netBet: float
    total: float
    totalReceivable: float
    paidCount: int
    unpaidCount: int


def compute_payable(participant: Participant, per_match_reward: float) -> float:
    """Signed amount a participant owes for the session.

    Each net loss costs ``per_match_reward``; each net win earns it back. A
    negative result means the participant is owed money. Temporary
    participants add their own stored fee; masters never pay one.
    """
    swing = (participant.losses - participant.wins) * per_match_reward
    return participant.effective_fee + swing


def compute_payable_with_service_fee(
    participant: Participant, service_fee: float, per_match_reward: float
) -> float:
    """Payable using the session-wide service fee instead of the stored fee.

    Compatibility path for callers that only know the session settings. The
    stored per-participant fee is authoritative; after a fee cascade both
    give the same answer.
    """
    swing = (participant.losses - participant.wins) * per_match_reward
    if participant.is_master:
        return swing
    return service_fee + swing


def total_receivable(
    participants: Iterable[Participant], per_match_reward: float
) -> float:
    """Sum of every participant's payable."""
    return sum(compute_payable(p, per_match_reward) for p in participants)


def summarize_session(
    participants: Iterable[Participant], per_match_reward: float
) -> SessionSummary:
    """Fee, bet and settlement totals for one session."""
    participants = list(participants)
    paid = sum(1 for p in participants if p.paid)
    total_fees = sum(p.effective_fee for p in participants)
    net_bet = sum((p.wins - p.losses) * per_match_reward for p in participants)
    return {
        "totalWins": sum(p.wins for p in participants),
        "totalLosses": sum(p.losses for p in participants),
        "totalFees": total_fees,
        "netBet": net_bet,
        "total": net_bet + total_fees,
        "totalReceivable": total_receivable(participants, per_match_reward),
        "paidCount": paid,
        "unpaidCount": len(participants) - paid,
    }
