"""Command line access to leaderboards, pairing, schedules and reports."""

from __future__ import annotations

import datetime
import random
from functools import wraps

import click
from firebase_admin import firestore
from flask import current_app
from flask.cli import AppGroup

from .billing.reports import build_report
from .errors import AppError
from .pairing.pairs import generate_random_pairs, pairs_for_roster
from .pairing.schedule import (
    average_matches_per_player,
    match_counts,
    schedule_without_back_to_back,
)
from .ranking.leaderboard import LeaderboardService
from .session.services import SessionService, validate_date
from .session.stores import ParticipationStore, PlayerStore, SessionStore

cli = AppGroup("shuttlebook", help="Session scores, fees and pairings.")


def _stores():
    db = firestore.client()
    return PlayerStore(db), SessionStore(db), ParticipationStore(db)


def _service():
    players, sessions, participations = _stores()
    return SessionService(
        players,
        sessions,
        participations,
        default_service_fee=current_app.config["DEFAULT_SERVICE_FEE"],
        default_per_match_reward=current_app.config["DEFAULT_PER_MATCH_REWARD"],
    )


def _session_on(sessions, session_date):
    """The session on a date, or an error if there is none."""
    session = sessions.find_by_date(validate_date(session_date))
    if session is None:
        raise click.ClickException(f"No session on {session_date}.")
    return session


def _roster(session_date):
    _, sessions, participations = _stores()
    return participations.list(_session_on(sessions, session_date)["id"])


def _find_by_name(items, name, get_name, what):
    matches = [item for item in items if get_name(item).lower() == name.lower()]
    if not matches:
        raise click.ClickException(f"No {what} named {name}.")
    return matches[0]


def app_errors(f):
    """Report AppError as a clean CLI failure."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except AppError as e:
            current_app.logger.warning(f"{f.__name__} failed: {e.message}")
            raise click.ClickException(e.message) from e

    return decorated_function


def _pair_label(pair):
    return " & ".join(p.name for p in pair)


@cli.command("leaderboard")
@click.option("--month", type=click.IntRange(1, 12), help="Defaults to this month.")
@click.option("--year", type=int, help="Defaults to this year.")
@app_errors
def leaderboard_command(month, year):
    """Show the monthly master-player leaderboard."""
    players, _, participations = _stores()
    board = LeaderboardService(players, participations).get_monthly_leaderboard(
        month, year
    )
    click.echo(f"Leaderboard {board['month']:02d}/{board['year']}")
    for rank, entry in enumerate(board["leaderboard"], start=1):
        click.echo(
            f"{rank}. {entry['name']} {entry['wins']}W-{entry['losses']}L "
            f"{entry['winRate']}% {entry['tier']} ({entry['sessions']} sessions)"
        )


@cli.command("pairs")
@click.argument("session_date")
@click.option("--random", "use_random", is_flag=True, help="Ignore tiers.")
@click.option("--seed", type=int, help="Seed for reproducible shuffles.")
@app_errors
def pairs_command(session_date, use_random, seed):
    """Pair the players of a session, balanced by tier."""
    roster = _roster(session_date)
    rng = random.Random(seed)
    if use_random:
        pairs = generate_random_pairs(roster, rng)
    else:
        players, _, participations = _stores()
        leaderboard = LeaderboardService(players, participations)
        day = datetime.date.fromisoformat(validate_date(session_date))
        pairs = pairs_for_roster(
            roster, lambda: leaderboard.get_tier_map(today=day), rng
        )

    for i, pair in enumerate(pairs, start=1):
        tiers = ", ".join(p.tier for p in pair if p.tier)
        click.echo(f"Pair {i}: {_pair_label(pair)}" + (f" [{tiers}]" if tiers else ""))


@cli.command("schedule")
@click.argument("session_date")
@click.option("--seed", type=int, help="Seed for reproducible shuffles.")
@app_errors
def schedule_command(session_date, seed):
    """Randomly pair a session's players and order their matches."""
    roster = _roster(session_date)
    pairs = generate_random_pairs(roster, random.Random(seed))
    schedule = schedule_without_back_to_back(pairs)
    counts = match_counts(roster, schedule)

    click.echo(
        f"{len(schedule)} matches, avg {average_matches_per_player(counts):.1f} "
        "matches per player"
    )
    for i, match in enumerate(schedule, start=1):
        click.echo(
            f"Match {i} (round {match.round}): "
            f"{_pair_label(match.pair_a)} vs {_pair_label(match.pair_b)}"
        )
    for p in roster:
        click.echo(f"{p.name}: {counts[p.participant_id]} matches")


@cli.command("report")
@click.option(
    "--kind", type=click.Choice(["daily", "range", "all"]), default="all"
)
@click.option("--start", "start_date", help="YYYY-MM-DD")
@click.option("--end", "end_date", help="YYYY-MM-DD")
@app_errors
def report_command(kind, start_date, end_date):
    """Print payables per session."""
    _, sessions, participations = _stores()
    for item in build_report(sessions, participations, kind, start_date, end_date):
        session = item["session"]
        click.echo(
            f"{session.get('sessionDate')} (fee {session.get('serviceFee', 0)}): "
            f"receivable {item['totalReceivable']:.0f}"
        )
        for row in item["players"]:
            p = row["participant"]
            fee = "-" if p.is_master else p.fee
            click.echo(
                f"  {p.name} {p.wins}W-{p.losses}L fee {fee} "
                f"payable {row['payable']:.0f}{' (paid)' if p.paid else ''}"
            )


@cli.command("open-session")
@click.argument("session_date")
@app_errors
def open_session_command(session_date):
    """Open (or reuse) the session for a date."""
    session = _service().open_session(session_date)
    click.echo(
        f"Session {session['id']} on {session['sessionDate']}: "
        f"fee {session.get('serviceFee')}, reward {session.get('perMatchReward')}"
    )


@cli.command("register-player")
@click.argument("name")
@app_errors
def register_player_command(name):
    """Register a master player."""
    player = _service().register_player(name)
    click.echo(f"Registered {player['name']} ({player['id']})")


@cli.command("remove-player")
@click.argument("name")
@app_errors
def remove_player_command(name):
    """Delete a master player; past sessions keep their name."""
    service = _service()
    player = _find_by_name(
        service.players.list(), name, lambda p: p.get("name", ""), "player"
    )
    service.remove_player(player["id"])
    click.echo(f"Removed {player['name']}")


@cli.command("add-player")
@click.argument("session_date")
@click.argument("name")
@click.option("--guest", is_flag=True, help="Add a temporary player.")
@click.option("--fee", type=float, help="Guest fee, defaults to the session fee.")
@app_errors
def add_player_command(session_date, name, guest, fee):
    """Add a registered player, or a guest, to a session."""
    service = _service()
    session = _session_on(service.sessions, session_date)
    if guest:
        participant = service.add_temporary_player(session["id"], name, fee)
        click.echo(f"Added guest {participant.name} (fee {participant.fee})")
        return
    if fee is not None:
        raise click.UsageError("--fee only applies to guests.")
    player = _find_by_name(
        service.players.list(), name, lambda p: p.get("name", ""), "player"
    )
    participant = service.add_master_player(session["id"], player["id"])
    click.echo(f"Added {participant.name}")


@cli.command("record")
@click.argument("session_date")
@click.argument("name")
@click.option("--loss", is_flag=True, help="Record a loss instead of a win.")
@app_errors
def record_command(session_date, name, loss):
    """Record a win (or a loss) for a session player."""
    service = _service()
    session = _session_on(service.sessions, session_date)
    participant = _find_by_name(
        service.list_participants(session["id"]), name, lambda p: p.name, "player"
    )
    if loss:
        participant = service.record_loss(participant.participant_id)
    else:
        participant = service.record_win(participant.participant_id)
    click.echo(f"{participant.name} {participant.wins}W-{participant.losses}L")


@cli.command("paid")
@click.argument("session_date")
@click.argument("name")
@click.option("--unpaid", is_flag=True, help="Clear the paid mark.")
@app_errors
def paid_command(session_date, name, unpaid):
    """Mark a session player as paid."""
    service = _service()
    session = _session_on(service.sessions, session_date)
    participant = _find_by_name(
        service.list_participants(session["id"]), name, lambda p: p.name, "player"
    )
    service.set_paid(participant.participant_id, not unpaid)
    click.echo(f"{participant.name} {'unpaid' if unpaid else 'paid'}")


@cli.command("settings")
@click.argument("session_date")
@click.option("--fee", "service_fee", type=float, help="Service fee for guests.")
@click.option("--reward", "per_match_reward", type=float, help="Per-match reward.")
@app_errors
def settings_command(session_date, service_fee, per_match_reward):
    """Change a session's service fee and/or per-match reward."""
    service = _service()
    session = _session_on(service.sessions, session_date)
    session = service.update_settings(session["id"], service_fee, per_match_reward)
    click.echo(
        f"Session on {session['sessionDate']}: "
        f"fee {session.get('serviceFee')}, reward {session.get('perMatchReward')}"
    )
