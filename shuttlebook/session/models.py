"""Data models for players, sessions and session participants."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, TypedDict

from shuttlebook.core.constants import ROLE_MASTER, ROLE_TEMPORARY
from shuttlebook.core.types import FirestoreDocument


class Player(FirestoreDocument, total=False):
    """A registered (master) player document in Firestore."""

    name: str


class Session(FirestoreDocument, total=False):
    """One dated play session."""

    sessionDate: str
    serviceFee: float
    perMatchReward: float


class ParticipationRecord(TypedDict):
    """A session-membership row joined with its session date.

    This is the shape the leaderboard aggregates over.
    """

    playerId: Optional[str]
    wins: int
    losses: int
    sessionDate: Optional[str]


@dataclass(frozen=True)
class Participant:
    """A player's presence in one session.

    ``role`` is the discriminant: master participants carry ``player_ref``
    and never owe a fee, temporary participants carry no reference and pay
    their own ``fee``. ``name`` is a snapshot taken when the participant was
    added, so deleting the player later leaves history readable.
    """

    participant_id: str
    name: str
    role: str = ROLE_TEMPORARY
    player_ref: Optional[str] = None
    session_id: Optional[str] = None
    wins: int = 0
    losses: int = 0
    fee: float = 0
    paid: bool = False
    tier: Optional[str] = None

    def __post_init__(self) -> None:
        """Reject role/reference combinations that cannot exist."""
        if self.role not in (ROLE_MASTER, ROLE_TEMPORARY):
            raise ValueError(f"Unknown participant role: {self.role!r}")
        if (self.role == ROLE_MASTER) != bool(self.player_ref):
            raise ValueError("Master participants need a player_ref, others must not.")

    @classmethod
    def master(
        cls, participant_id: str, player_ref: str, name: str, **kwargs: Any
    ) -> Participant:
        """Build a participant backed by a registered player."""
        return cls(participant_id, name, ROLE_MASTER, player_ref, **kwargs)

    @classmethod
    def temporary(
        cls, participant_id: str, name: str, fee: float = 0, **kwargs: Any
    ) -> Participant:
        """Build a one-off participant with no player identity."""
        return cls(participant_id, name, ROLE_TEMPORARY, None, fee=fee, **kwargs)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Participant:
        """Build a participant from a ``session_players`` document."""
        player_ref = data.get("playerId")
        return cls(
            participant_id=doc_id,
            name=data.get("playerName") or "",
            role=ROLE_MASTER if player_ref else ROLE_TEMPORARY,
            player_ref=player_ref or None,
            session_id=data.get("sessionId"),
            wins=data.get("wins") or 0,
            losses=data.get("losses") or 0,
            fee=data.get("fee") or 0,
            paid=bool(data.get("paid", False)),
        )

    @property
    def is_master(self) -> bool:
        return self.role == ROLE_MASTER

    @property
    def effective_fee(self) -> float:
        """The fee this participant actually owes."""
        return 0 if self.is_master else self.fee

    def with_tier(self, tier: Optional[str]) -> Participant:
        """Return a copy annotated with a tier, leaving this one untouched."""
        return replace(self, tier=tier)
