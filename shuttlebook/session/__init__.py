"""Players, sessions and session participants."""

from .models import Participant, ParticipationRecord, Player, Session
from .services import SessionService
from .stores import ParticipationStore, PlayerStore, SessionStore

__all__ = [
    "Participant",
    "ParticipationRecord",
    "ParticipationStore",
    "Player",
    "PlayerStore",
    "Session",
    "SessionService",
    "SessionStore",
]
