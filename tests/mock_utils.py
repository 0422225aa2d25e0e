"""Mock utilities for Firestore and session participants."""

import unittest.mock
from typing import Any, Optional

from mockfirestore import CollectionReference, MockFirestore, Query

from shuttlebook.session.models import Participant


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore so ``where(filter=...)`` works."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where


class MockBatch:
    """Collects batched writes and applies them on commit."""

    def __init__(self, db: Any) -> None:
        self.db = db
        self.updates: list[tuple[Any, Any]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def update(self, ref: Any, data: Any) -> None:
        self.updates.append((ref, data))

    def delete(self, ref: Any) -> None:
        self.updates.append((ref, "DELETE"))

    def _real_commit(self) -> None:
        for ref, data in self.updates:
            if data == "DELETE":
                ref.delete()
            else:
                ref.update(data)


def make_db() -> MockFirestore:
    """A patched in-memory Firestore with batch support."""
    patch_mockfirestore()
    db = MockFirestore()
    db.batch = lambda: MockBatch(db)
    return db


def master(
    pid: str, name: str = "", tier: Optional[str] = None, **kwargs: Any
) -> Participant:
    return Participant.master(pid, f"player-{pid}", name or pid, tier=tier, **kwargs)


def temp(pid: str, name: str = "", **kwargs: Any) -> Participant:
    return Participant.temporary(pid, name or pid, **kwargs)
