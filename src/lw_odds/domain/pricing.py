"""Odds for the three weekly markets.

Every function here is pure: no I/O, no logging, no side effects. Each one
follows the same pipeline::

    score -> probability -> margin -> renormalize -> clamp -> 1/p (2 dp)

The probability caps shrink as the field grows (0.90 for a two-way matchup,
0.50 for the team field, 0.35 for the player field). Multi-way markets have
no floor: a longshot's price is allowed to drift as long as it likes.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Final

from src.lw_odds.domain.models import MatchupOdds, PlayerProjection, TeamProjection

#: Logistic scale in points; larger means a flatter, less certain curve.
MATCHUP_LOGISTIC_SCALE: Final[float] = 18.0
MATCHUP_MARGIN: Final[float] = 0.05
MATCHUP_MIN_P: Final[float] = 0.10  # max odds 10.0
MATCHUP_MAX_P: Final[float] = 0.90  # min odds ~1.11

FIELD_MARGIN: Final[float] = 0.08
TEAM_MAX_P: Final[float] = 0.50  # min odds 2.00
PLAYER_MAX_P: Final[float] = 0.35  # min odds ~2.86

PLAYER_PROJECTION_WEIGHT: Final[float] = 0.6
PLAYER_HISTORY_WEIGHT: Final[float] = 0.4

EVEN_ODDS: Final[float] = 2.0


def to_decimal_odds(p: float) -> float:
    """Invert a probability into decimal odds rounded to 2 places."""
    return round(1.0 / p, 2)


def clamp(p: float, low: float, high: float) -> float:
    return min(max(p, low), high)


def normalize_with_margin(scores: Sequence[float], margin: float) -> list[float]:
    """Scores -> probabilities with the house margin applied and renormalized.

    A zero total is treated as 1 so that an all-zero field yields all-zero
    probabilities instead of dividing by zero.
    """
    total = sum(scores) or 1.0
    probs = [s / total * (1.0 - margin) for s in scores]
    norm = sum(probs) or 1.0
    return [p / norm for p in probs]


def matchup_win_probability(proj_a: float, proj_b: float) -> float:
    """Logistic P(A beats B) from the projected point differential."""
    return 1.0 / (1.0 + math.exp(-(proj_a - proj_b) / MATCHUP_LOGISTIC_SCALE))


def matchup_odds(proj_a: float | None, proj_b: float | None) -> MatchupOdds:
    """Head-to-head decimal odds for both sides of a matchup."""
    a = proj_a or 0.0
    b = proj_b or 0.0
    if not a and not b:
        return MatchupOdds(odds_a=EVEN_ODDS, odds_b=EVEN_ODDS)

    p_a = matchup_win_probability(a, b)
    p_b = 1.0 - p_a

    p_a *= 1.0 - MATCHUP_MARGIN / 2
    p_b *= 1.0 - MATCHUP_MARGIN / 2
    norm = p_a + p_b
    p_a /= norm
    p_b /= norm

    p_a = clamp(p_a, MATCHUP_MIN_P, MATCHUP_MAX_P)
    p_b = clamp(p_b, MATCHUP_MIN_P, MATCHUP_MAX_P)
    return MatchupOdds(odds_a=to_decimal_odds(p_a), odds_b=to_decimal_odds(p_b))


def _price_field(
    keys: Sequence[object], scores: Sequence[float], max_p: float
) -> dict:
    probs = normalize_with_margin(scores, FIELD_MARGIN)
    prices = {}
    for key, p in zip(keys, probs):
        if p <= 0:
            # No finite price for an outcome the model gives no chance
            continue
        prices[key] = to_decimal_odds(min(p, max_p))
    return prices


def team_top_score_odds(teams: Sequence[TeamProjection]) -> dict[int, float]:
    """Decimal odds per roster of finishing the week as top-scoring team."""
    if not teams:
        return {}
    scores = [max(t.projected_points or 0.0, 0.0) for t in teams]
    return _price_field([t.roster_id for t in teams], scores, TEAM_MAX_P)


def player_rating(player: PlayerProjection) -> float:
    """Blend of projection and history, floored at zero.

    A player without history is rated on the projection alone.
    """
    proj = player.projected_points or 0.0
    hist = player.historical_average if player.historical_average is not None else proj
    rating = PLAYER_PROJECTION_WEIGHT * proj + PLAYER_HISTORY_WEIGHT * hist
    return max(rating, 0.0)


def player_top_score_odds(players: Sequence[PlayerProjection]) -> dict[str, float]:
    """Decimal odds per player of finishing the week as top scorer."""
    if not players:
        return {}
    scores = [player_rating(p) for p in players]
    return _price_field([p.player_id for p in players], scores, PLAYER_MAX_P)
