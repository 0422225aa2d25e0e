"""Tests for session reports."""

from __future__ import annotations

import unittest

from shuttlebook.billing.reports import build_report
from shuttlebook.errors import ValidationError
from shuttlebook.session.stores import ParticipationStore, SessionStore
from tests.mock_utils import make_db


class ReportTestCase(unittest.TestCase):
    """Test case for daily, range and full reports."""

    def setUp(self) -> None:
        self.db = make_db()
        self.sessions = SessionStore(self.db)
        self.participations = ParticipationStore(self.db)

        self.may3 = self.sessions.create("2025-05-03", 50000, 10)
        self.may10 = self.sessions.create("2025-05-10", 40000, 20)
        self.june = self.sessions.create("2025-06-01", 0, 10)

        m = self.participations.add(self.may3["id"], player_ref="p1", name="Linh")
        t = self.participations.add(self.may3["id"], name="Guest", fee=50000)
        self.participations.update(m.participant_id, {"wins": 3, "losses": 5})
        self.participations.update(t.participant_id, {"wins": 5, "losses": 3})

        g = self.participations.add(self.may10["id"], name="Guest", fee=40000)
        self.participations.update(g.participant_id, {"wins": 0, "losses": 1})

    def test_daily_report(self) -> None:
        report = build_report(self.sessions, self.participations, "daily", "2025-05-03")

        self.assertEqual(len(report), 1)
        self.assertEqual(report[0]["session"]["id"], self.may3["id"])
        self.assertEqual(report[0]["totalReceivable"], 20 + 49980)
        payables = sorted(row["payable"] for row in report[0]["players"])
        self.assertEqual(payables, [20, 49980])

    def test_daily_report_without_session(self) -> None:
        report = build_report(self.sessions, self.participations, "daily", "2025-05-04")
        self.assertEqual(report, [])

    def test_range_report(self) -> None:
        report = build_report(
            self.sessions, self.participations, "range", "2025-05-01", "2025-05-31"
        )
        dates = [r["session"]["sessionDate"] for r in report]
        self.assertEqual(dates, ["2025-05-03", "2025-05-10"])
        self.assertEqual(report[1]["totalReceivable"], 40020)

    def test_full_report(self) -> None:
        report = build_report(self.sessions, self.participations)
        self.assertEqual(len(report), 3)
        self.assertEqual(report[2]["players"], [])
        self.assertEqual(report[2]["totalReceivable"], 0)

    def test_missing_dates(self) -> None:
        with self.assertRaises(ValidationError):
            build_report(self.sessions, self.participations, "daily")
        with self.assertRaises(ValidationError):
            build_report(self.sessions, self.participations, "range", "2025-05-01")


if __name__ == "__main__":
    unittest.main()
