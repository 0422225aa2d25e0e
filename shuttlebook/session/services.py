"""Service layer for running a play session."""

from __future__ import annotations

import datetime
import logging
import math
import numbers
from typing import TYPE_CHECKING, Any, Optional

from shuttlebook.billing.payables import summarize_session
from shuttlebook.core.constants import DEFAULT_PER_MATCH_REWARD, DEFAULT_SERVICE_FEE
from shuttlebook.errors import (
    DuplicateResourceError,
    NotFoundError,
    RoleError,
    ValidationError,
)

if TYPE_CHECKING:
    from shuttlebook.billing.payables import SessionSummary

    from .models import Participant, Player, Session
    from .stores import ParticipationStore, PlayerStore, SessionStore


def validate_date(value: Any) -> str:
    """Return a ``YYYY-MM-DD`` string or raise ValidationError."""
    try:
        return datetime.date.fromisoformat(str(value)).isoformat()
    except ValueError as e:
        raise ValidationError(f"Invalid session date: {value!r}") from e


def validate_amount(value: Any, label: str) -> float:
    """Accept non-negative numbers only (booleans are not numbers here)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{label} must be a number.")
    if not math.isfinite(value):
        raise ValidationError(f"{label} must be a finite number.")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative.")
    return value


def validate_count(value: Any, label: str) -> int:
    """Accept non-negative integers only."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(f"{label} must be a whole number.")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative.")
    return int(value)


class SessionService:
    """Session lifecycle over the player, session and participation stores.

    Every edit is validated before anything is written, so a rejected edit
    leaves the stores untouched.
    """

    def __init__(
        self,
        players: PlayerStore,
        sessions: SessionStore,
        participations: ParticipationStore,
        default_service_fee: float = DEFAULT_SERVICE_FEE,
        default_per_match_reward: float = DEFAULT_PER_MATCH_REWARD,
    ):
        self.players = players
        self.sessions = sessions
        self.participations = participations
        self.default_service_fee = default_service_fee
        self.default_per_match_reward = default_per_match_reward

    # Players

    def register_player(self, name: str) -> Player:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Player name is required.")
        return self.players.create(name)

    def remove_player(self, player_id: str) -> None:
        if self.players.get(player_id) is None:
            raise NotFoundError(f"Player {player_id} not found.")
        self.players.delete(player_id)

    # Sessions

    def open_session(self, session_date: Any) -> Session:
        """Return the session for a date, creating it with defaults if needed."""
        session_date = validate_date(session_date)
        existing = self.sessions.find_by_date(session_date)
        if existing:
            return existing
        logging.info(f"Creating session for {session_date}")
        return self.sessions.create(
            session_date, self.default_service_fee, self.default_per_match_reward
        )

    def get_session(self, session_id: str) -> Session:
        session = self.sessions.get(session_id)
        if session is None:
            raise NotFoundError(f"Session {session_id} not found.")
        return session

    def update_settings(
        self,
        session_id: str,
        service_fee: Optional[float] = None,
        per_match_reward: Optional[float] = None,
    ) -> Session:
        """Change fee/reward; a new service fee is pushed to temporary players."""
        updates: dict[str, float] = {}
        if service_fee is not None:
            updates["serviceFee"] = validate_amount(service_fee, "Service fee")
        if per_match_reward is not None:
            updates["perMatchReward"] = validate_amount(
                per_match_reward, "Per-match reward"
            )

        session = self.sessions.update(session_id, updates)
        if "serviceFee" in updates:
            changed = self.participations.update_all_fees(
                session_id, updates["serviceFee"]
            )
            logging.info(f"Applied fee {updates['serviceFee']} to {changed} players")
        return session

    # Participants

    def list_participants(self, session_id: str) -> list[Participant]:
        return self.participations.list(session_id)

    def add_master_player(self, session_id: str, player_id: str) -> Participant:
        session = self.get_session(session_id)
        player = self.players.get(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found.")
        roster = self.participations.list(session["id"])
        if any(p.player_ref == player_id for p in roster):
            raise DuplicateResourceError(
                f"{player.get('name', player_id)} is already in this session."
            )
        return self.participations.add(
            session["id"], player_ref=player_id, name=player.get("name"), fee=0
        )

    def add_temporary_player(
        self, session_id: str, name: str, fee: Optional[float] = None
    ) -> Participant:
        """Add a one-off player; the fee defaults to the session's service fee."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Player name is required.")
        session = self.get_session(session_id)
        if fee is None:
            fee = session.get("serviceFee") or 0
        fee = validate_amount(fee, "Fee")
        return self.participations.add(session["id"], name=name, fee=fee)

    def _participant(self, participant_id: str) -> Participant:
        participant = self.participations.get(participant_id)
        if participant is None:
            raise NotFoundError(f"Participant {participant_id} not found.")
        return participant

    def record_win(self, participant_id: str) -> Participant:
        participant = self._participant(participant_id)
        self.participations.update(participant_id, {"wins": participant.wins + 1})
        return self._participant(participant_id)

    def record_loss(self, participant_id: str) -> Participant:
        participant = self._participant(participant_id)
        self.participations.update(participant_id, {"losses": participant.losses + 1})
        return self._participant(participant_id)

    def set_wins(self, participant_id: str, wins: Any) -> None:
        wins = validate_count(wins, "Wins")
        self._participant(participant_id)
        self.participations.update(participant_id, {"wins": wins})

    def set_losses(self, participant_id: str, losses: Any) -> None:
        losses = validate_count(losses, "Losses")
        self._participant(participant_id)
        self.participations.update(participant_id, {"losses": losses})

    def set_fee(self, participant_id: str, fee: Any) -> None:
        fee = validate_amount(fee, "Fee")
        if self._participant(participant_id).is_master:
            raise RoleError("Master players do not pay a fee.")
        self.participations.update(participant_id, {"fee": fee})

    def set_paid(self, participant_id: str, paid: bool) -> None:
        self._participant(participant_id)
        self.participations.update(participant_id, {"paid": bool(paid)})

    def remove_participant(self, participant_id: str) -> None:
        self._participant(participant_id)
        self.participations.delete(participant_id)

    def summary(self, session_id: str) -> SessionSummary:
        session = self.get_session(session_id)
        reward = session.get("perMatchReward")
        if reward is None:
            reward = self.default_per_match_reward
        return summarize_session(self.participations.list(session_id), reward)
