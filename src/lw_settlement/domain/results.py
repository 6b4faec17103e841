"""Week-level winners derived from final matchup entries."""

from collections.abc import Iterable

from src.lw_league.domain.models import MatchupEntry


def _first_max(totals: dict) -> object | None:
    # dicts keep insertion order, and strict > keeps the first of equal totals
    best_id = None
    best_points = float("-inf")
    for key, points in totals.items():
        if points > best_points:
            best_points = points
            best_id = key
    return best_id


def top_scoring_player_id(entries: Iterable[MatchupEntry]) -> str | None:
    """Player with the highest summed points across every entry of the week."""
    totals: dict[str, float] = {}
    for entry in entries:
        for player_id, points in entry.players_points.items():
            totals[player_id] = totals.get(player_id, 0.0) + (points or 0.0)
    return _first_max(totals)  # type: ignore[return-value]


def top_scoring_roster_id(entries: Iterable[MatchupEntry]) -> int | None:
    """Roster with the highest points total; entries without a roster id are ignored."""
    totals: dict[int, float] = {}
    for entry in entries:
        if entry.roster_id is None:
            continue
        totals[entry.roster_id] = totals.get(entry.roster_id, 0.0) + (entry.points or 0.0)
    return _first_max(totals)  # type: ignore[return-value]


def matchup_winner(pair: list[MatchupEntry]) -> int | None:
    """Roster id of the winning side; the first listed side wins a tie.

    None when the matchup does not have both sides yet.
    """
    if len(pair) < 2:
        return None
    first, second = pair[0], pair[1]
    if (first.points or 0.0) >= (second.points or 0.0):
        return first.roster_id
    return second.roster_id
