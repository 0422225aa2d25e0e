"""Tests for the shuttlebook CLI commands."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from shuttlebook import create_app
from shuttlebook.session.stores import ParticipationStore, PlayerStore, SessionStore
from tests.mock_utils import make_db


class CliTestCase(unittest.TestCase):
    """Test case for the CLI over in-memory Firestore."""

    def setUp(self) -> None:
        self.db = make_db()
        patcher = patch("shuttlebook.cli.firestore")
        self.mock_firestore = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_firestore.client.return_value = self.db

        self.app = create_app({"TESTING": True, "DEFAULT_SERVICE_FEE": 40})
        self.runner = self.app.test_cli_runner()

        players = PlayerStore(self.db)
        self.sessions = SessionStore(self.db)
        self.participations = ParticipationStore(self.db)

        self.session = self.sessions.create("2025-05-03", 40, 10)
        records = (("An", 6, 4), ("Binh", 1, 9), ("Chi", 5, 5), ("Dung", 2, 3))
        for name, wins, losses in records:
            player = players.create(name)
            p = self.participations.add(
                self.session["id"], player_ref=player["id"], name=name
            )
            self.participations.update(
                p.participant_id, {"wins": wins, "losses": losses}
            )
        guest = self.participations.add(self.session["id"], name="Guest", fee=40)
        self.participations.update(guest.participant_id, {"wins": 1, "losses": 2})

    def invoke(self, *args):
        return self.runner.invoke(args=["shuttlebook", *args])

    def test_leaderboard(self) -> None:
        result = self.invoke("leaderboard", "--month", "5", "--year", "2025")

        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.splitlines()
        self.assertEqual(lines[0], "Leaderboard 05/2025")
        self.assertTrue(lines[1].startswith("1. An 6W-4L 60.0% Diamond"))
        self.assertNotIn("Guest", result.output)

    def test_pairs_balanced(self) -> None:
        result = self.invoke("pairs", "2025-05-03")

        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.splitlines()
        self.assertEqual(len(lines), 3)
        self.assertIn("An", lines[0])
        self.assertIn("Guest", lines[0])
        self.assertTrue(lines[2].startswith("Pair 3: "))

    def test_pairs_random_is_seeded(self) -> None:
        first = self.invoke("pairs", "2025-05-03", "--random", "--seed", "4")
        second = self.invoke("pairs", "2025-05-03", "--random", "--seed", "4")

        self.assertEqual(first.exit_code, 0, first.output)
        self.assertEqual(first.output, second.output)

    def test_pairs_fall_back_when_tiers_fail(self) -> None:
        with patch(
            "shuttlebook.cli.LeaderboardService.get_tier_map",
            side_effect=RuntimeError("boom"),
        ):
            result = self.invoke("pairs", "2025-05-03", "--seed", "1")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(len(result.output.splitlines()), 3)
        self.assertNotIn("[", result.output)

    def test_schedule(self) -> None:
        result = self.invoke("schedule", "2025-05-03", "--seed", "2")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(result.output.startswith("3 matches"))
        self.assertIn("Match 1 (round 1)", result.output)

    def test_unknown_session(self) -> None:
        result = self.invoke("schedule", "2025-05-04")
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("No session on 2025-05-04", result.output)

    def test_bad_date(self) -> None:
        result = self.invoke("pairs", "yesterday")
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Invalid session date", result.output)

    def test_report(self) -> None:
        result = self.invoke("report", "--kind", "daily", "--start", "2025-05-03")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("2025-05-03 (fee 40): receivable 120", result.output)
        self.assertIn("Guest 1W-2L fee 40 payable 50", result.output)

    def test_report_needs_dates(self) -> None:
        result = self.invoke("report", "--kind", "range")
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("needs a start and an end date", result.output)

    def test_open_session(self) -> None:
        result = self.invoke("open-session", "2025-05-10")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("on 2025-05-10: fee 40, reward 10", result.output)
        self.assertIsNotNone(self.sessions.find_by_date("2025-05-10"))

    def _participant(self, name):
        roster = self.participations.list(self.session["id"])
        return next(p for p in roster if p.name == name)

    def test_register_and_add_player(self) -> None:
        result = self.invoke("register-player", "Em")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(result.output.startswith("Registered Em ("))

        result = self.invoke("add-player", "2025-05-03", "em")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Added Em", result.output)
        self.assertTrue(self._participant("Em").is_master)

    def test_add_player_twice(self) -> None:
        result = self.invoke("add-player", "2025-05-03", "An")
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("An is already in this session.", result.output)

    def test_add_unknown_player(self) -> None:
        result = self.invoke("add-player", "2025-05-03", "Zed")
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("No player named Zed.", result.output)

    def test_add_guest(self) -> None:
        result = self.invoke("add-player", "2025-05-03", "Tam", "--guest")
        custom = self.invoke(
            "add-player", "2025-05-03", "Vy", "--guest", "--fee", "15"
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(custom.exit_code, 0, custom.output)
        self.assertEqual(self._participant("Tam").fee, 40)
        self.assertEqual(self._participant("Vy").fee, 15)

    def test_remove_player(self) -> None:
        result = self.invoke("remove-player", "Binh")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Removed Binh", result.output)
        names = [p["name"] for p in PlayerStore(self.db).list()]
        self.assertNotIn("Binh", names)
        self.assertEqual(self._participant("Binh").wins, 1)

    def test_record_win_and_loss(self) -> None:
        result = self.invoke("record", "2025-05-03", "Guest")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Guest 2W-2L", result.output)

        result = self.invoke("record", "2025-05-03", "Guest", "--loss")
        self.assertIn("Guest 2W-3L", result.output)

    def test_paid(self) -> None:
        result = self.invoke("paid", "2025-05-03", "Guest")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(self._participant("Guest").paid)

        self.invoke("paid", "2025-05-03", "Guest", "--unpaid")
        self.assertFalse(self._participant("Guest").paid)

    def test_settings_cascade_fee(self) -> None:
        result = self.invoke("settings", "2025-05-03", "--fee", "60")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("fee 60.0, reward 10", result.output)
        self.assertEqual(self._participant("Guest").fee, 60)
        self.assertEqual(self._participant("An").fee, 0)

    def test_settings_rejects_non_finite(self) -> None:
        result = self.invoke("settings", "2025-05-03", "--reward", "inf")

        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("must be a finite number", result.output)
        self.assertEqual(self.sessions.get(self.session["id"])["perMatchReward"], 10)


if __name__ == "__main__":
    unittest.main()
