"""Firestore access for players, sessions and session participants."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, cast

from firebase_admin import firestore
from google.cloud.firestore import FieldFilter

from shuttlebook.core.constants import (
    FIRESTORE_BATCH_LIMIT,
    PLAYERS_COLLECTION,
    SESSION_PLAYERS_COLLECTION,
    SESSIONS_COLLECTION,
)
from shuttlebook.errors import NotFoundError

from .models import Participant, ParticipationRecord, Player, Session

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def _with_id(doc: DocumentSnapshot) -> dict[str, Any]:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data


class PlayerStore:
    """Registry of master players."""

    def __init__(self, db: Optional[Client] = None):
        self.db = db if db is not None else firestore.client()
        self.collection = self.db.collection(PLAYERS_COLLECTION)

    def list(self) -> list[Player]:
        players = [
            cast(Player, _with_id(doc))
            for doc in self.collection.stream()
            if doc.exists and doc.to_dict()
        ]
        players.sort(key=lambda p: p.get("name", "").lower())
        return players

    def get(self, player_id: str) -> Optional[Player]:
        doc = cast("DocumentSnapshot", self.collection.document(player_id).get())
        if not doc.exists:
            return None
        return cast(Player, _with_id(doc))

    def create(self, name: str) -> Player:
        ref = self.collection.document()
        ref.set({"name": name, "createdAt": firestore.SERVER_TIMESTAMP})
        return {"id": ref.id, "name": name}

    def delete(self, player_id: str) -> None:
        """Remove a player; their session records keep the name snapshot."""
        self.collection.document(player_id).delete()


class SessionStore:
    """Dated sessions with their fee and reward settings."""

    def __init__(self, db: Optional[Client] = None):
        self.db = db if db is not None else firestore.client()
        self.collection = self.db.collection(SESSIONS_COLLECTION)

    def create(
        self, session_date: str, service_fee: float, per_match_reward: float
    ) -> Session:
        ref = self.collection.document()
        ref.set(
            {
                "sessionDate": session_date,
                "serviceFee": service_fee,
                "perMatchReward": per_match_reward,
                "createdAt": firestore.SERVER_TIMESTAMP,
            }
        )
        return {
            "id": ref.id,
            "sessionDate": session_date,
            "serviceFee": service_fee,
            "perMatchReward": per_match_reward,
        }

    def get(self, session_id: str) -> Optional[Session]:
        doc = cast("DocumentSnapshot", self.collection.document(session_id).get())
        if not doc.exists:
            return None
        return cast(Session, _with_id(doc))

    def update(self, session_id: str, updates: dict[str, Any]) -> Session:
        """Apply ``serviceFee`` and/or ``perMatchReward`` changes."""
        allowed = {
            k: v
            for k, v in updates.items()
            if k in ("serviceFee", "perMatchReward") and v is not None
        }
        ref = self.collection.document(session_id)
        doc = cast("DocumentSnapshot", ref.get())
        if not doc.exists:
            raise NotFoundError(f"Session {session_id} not found.")
        if allowed:
            ref.update(allowed)
        return cast(Session, {**_with_id(doc), **allowed})

    def find_by_date(self, session_date: str) -> Optional[Session]:
        """First session on a date; several may exist but one is used."""
        docs = list(
            self.collection.where(
                filter=FieldFilter("sessionDate", "==", session_date)
            ).stream()
        )
        docs = [doc for doc in docs if doc.exists]
        if not docs:
            return None
        return cast(Session, _with_id(docs[0]))

    def list_between(self, start_date: str, end_date: str) -> list[Session]:
        """Sessions dated within ``start_date``..``end_date`` inclusive."""
        query = self.collection.where(
            filter=FieldFilter("sessionDate", ">=", start_date)
        ).where(filter=FieldFilter("sessionDate", "<=", end_date))
        sessions = [
            cast(Session, _with_id(doc)) for doc in query.stream() if doc.exists
        ]
        sessions.sort(key=lambda s: s.get("sessionDate", ""))
        return sessions

    def list_all(self) -> list[Session]:
        sessions = [
            cast(Session, _with_id(doc))
            for doc in self.collection.stream()
            if doc.exists and doc.to_dict()
        ]
        sessions.sort(key=lambda s: s.get("sessionDate", ""))
        return sessions


class ParticipationStore:
    """Per-session participant rows (wins, losses, fee, paid)."""

    def __init__(self, db: Optional[Client] = None):
        self.db = db if db is not None else firestore.client()
        self.collection = self.db.collection(SESSION_PLAYERS_COLLECTION)

    def _session_docs(self, session_id: str) -> list[DocumentSnapshot]:
        query = self.collection.where(filter=FieldFilter("sessionId", "==", session_id))
        return [doc for doc in query.stream() if doc.exists and doc.to_dict()]

    def list(self, session_id: str) -> list[Participant]:
        return [
            Participant.from_document(doc.id, doc.to_dict() or {})
            for doc in self._session_docs(session_id)
        ]

    def get(self, participant_id: str) -> Optional[Participant]:
        doc = cast(
            "DocumentSnapshot", self.collection.document(participant_id).get()
        )
        if not doc.exists:
            return None
        return Participant.from_document(doc.id, doc.to_dict() or {})

    def add(
        self,
        session_id: str,
        player_ref: Optional[str] = None,
        name: Optional[str] = None,
        fee: float = 0,
    ) -> Participant:
        """Add a master (``player_ref``) or temporary (``name``) participant."""
        data = {
            "sessionId": session_id,
            "playerId": player_ref or None,
            "playerName": name or None,
            "fee": fee or 0,
            "wins": 0,
            "losses": 0,
            "paid": False,
            "createdAt": firestore.SERVER_TIMESTAMP,
        }
        ref = self.collection.document()
        ref.set(data)
        return Participant.from_document(ref.id, data)

    def update(self, participant_id: str, updates: dict[str, Any]) -> None:
        """Set any of ``wins``, ``losses``, ``fee`` and ``paid``."""
        allowed = {
            k: v for k, v in updates.items() if k in ("wins", "losses", "fee", "paid")
        }
        if not allowed:
            return
        ref = self.collection.document(participant_id)
        if not cast("DocumentSnapshot", ref.get()).exists:
            raise NotFoundError(f"Participant {participant_id} not found.")
        ref.update(allowed)

    def delete(self, participant_id: str) -> None:
        self.collection.document(participant_id).delete()

    def update_all_fees(self, session_id: str, fee: float) -> int:
        """Set the fee of every temporary participant in a session.

        Masters are skipped since they never owe a fee. Returns the number of
        records updated.
        """
        docs = [
            doc
            for doc in self._session_docs(session_id)
            if not (doc.to_dict() or {}).get("playerId")
        ]
        for start in range(0, len(docs), FIRESTORE_BATCH_LIMIT):
            batch = self.db.batch()
            for doc in docs[start : start + FIRESTORE_BATCH_LIMIT]:
                batch.update(doc.reference, {"fee": fee})
            batch.commit()
        return len(docs)

    def list_all_records(self) -> list[ParticipationRecord]:
        """Every participant row joined with its session's date."""
        session_dates = {
            doc.id: (doc.to_dict() or {}).get("sessionDate")
            for doc in self.db.collection(SESSIONS_COLLECTION).stream()
            if doc.exists
        }
        records: list[ParticipationRecord] = []
        for doc in self.collection.stream():
            data = doc.to_dict()
            if not data:
                continue
            records.append(
                {
                    "playerId": data.get("playerId"),
                    "wins": data.get("wins") or 0,
                    "losses": data.get("losses") or 0,
                    "sessionDate": session_dates.get(data.get("sessionId")),
                }
            )
        return records
