"""Pairing helpers over a week's matchup entries."""

from collections.abc import Iterable

from src.lw_league.domain.models import MatchupEntry


def group_by_matchup(entries: Iterable[MatchupEntry]) -> dict[int, list[MatchupEntry]]:
    """matchup_id -> entries in provider order.

    Entries without a matchup id (byes, unscheduled rosters) are left out so
    they can never be mistaken for a side of a real matchup.
    """
    groups: dict[int, list[MatchupEntry]] = {}
    for entry in entries:
        if entry.matchup_id is None:
            continue
        groups.setdefault(entry.matchup_id, []).append(entry)
    return groups
