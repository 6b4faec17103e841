"""Projection and history inputs for the pricing functions.

Pure transformations of provider payloads into the scores the markets are
priced from. No I/O.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from src.lw_league.domain.models import MatchupEntry, PlayerInfo
from src.lw_odds.domain.models import PlayerProjection

PROP_POSITIONS = frozenset({"QB", "RB", "WR", "TE"})

# Scoring keys in order of preference
_POINTS_KEYS = ("pts_ppr", "pts_half_ppr", "pts_std")


def projected_points(stats: Mapping[str, Any]) -> float:
    for key in _POINTS_KEYS:
        value = stats.get(key)
        if value is not None:
            return float(value)
    return 0.0


def build_player_projection_map(rows: Iterable[Mapping[str, Any]]) -> dict[str, float]:
    """Player id -> projected fantasy points for the week."""
    projections: dict[str, float] = {}
    for row in rows:
        player_id = row.get("player_id")
        if not player_id:
            continue
        projections[str(player_id)] = projected_points(row.get("stats") or {})
    return projections


def build_roster_projection_map(
    entries: Iterable[MatchupEntry], player_projections: Mapping[str, float]
) -> dict[int, float]:
    """Roster id -> summed projection of that roster's starters."""
    totals: dict[int, float] = {}
    for entry in entries:
        if entry.roster_id is None:
            continue
        total = totals.get(entry.roster_id, 0.0)
        for player_id in entry.starters:
            total += player_projections.get(player_id, 0.0)
        totals[entry.roster_id] = total
    return totals


def average_points_before_week(
    weekly_stats: Mapping[str, Any], current_week: int | None
) -> float | None:
    """Mean PPR over the weeks already completed, or None without history."""
    if not current_week or current_week <= 1:
        return None
    total = 0.0
    count = 0
    for week_key, entry in weekly_stats.items():
        try:
            week = int(week_key)
        except (TypeError, ValueError):
            continue
        if week >= current_week:
            continue
        pts = ((entry or {}).get("stats") or {}).get("pts_ppr")
        if pts is not None:
            total += float(pts)
            count += 1
    return total / count if count else None


def select_prop_candidates(
    entries: Iterable[MatchupEntry],
    players: Mapping[str, PlayerInfo],
    player_projections: Mapping[str, float],
) -> list[PlayerProjection]:
    """Starters at skill positions with a projection form the player market.

    Candidates keep the order starters first appear in the matchup list.
    """
    seen: dict[str, None] = {}
    for entry in entries:
        for player_id in entry.starters:
            seen.setdefault(player_id, None)

    candidates = []
    for player_id in seen:
        info = players.get(player_id)
        if info is None or info.position not in PROP_POSITIONS:
            continue
        proj = player_projections.get(player_id, 0.0)
        if not proj:
            continue
        candidates.append(
            PlayerProjection(
                player_id=player_id,
                projected_points=proj,
                name=info.name,
                position=info.position,
                team=info.team,
            )
        )
    return candidates
