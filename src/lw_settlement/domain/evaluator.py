"""Leg and wager evaluation against one week's final results."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from src.lw_common.enums import LegType
from src.lw_league.domain.matchups import group_by_matchup
from src.lw_league.domain.models import MatchupEntry, WeeklyResult
from src.lw_settlement.domain.results import (
    matchup_winner,
    top_scoring_player_id,
    top_scoring_roster_id,
)
from src.lw_settlement.domain.verdict import Verdict, fold_verdicts
from src.lw_slip.domain.models import Leg


@dataclass
class WeekOutcome:
    """Everything a leg can be judged on, computed once per week."""

    week: int
    matchups: dict[int, list[MatchupEntry]] = field(default_factory=dict)
    top_player_id: str | None = None
    top_roster_id: int | None = None

    @classmethod
    def from_result(cls, result: WeeklyResult) -> "WeekOutcome":
        return cls(
            week=result.week,
            matchups=group_by_matchup(result.entries),
            top_player_id=top_scoring_player_id(result.entries),
            top_roster_id=top_scoring_roster_id(result.entries),
        )


def evaluate_leg(leg: Leg, outcome: WeekOutcome) -> Verdict:
    if leg.type == LegType.MATCH_WINNER:
        if leg.matchup_id is None:
            return Verdict.UNKNOWN
        winner = matchup_winner(outcome.matchups.get(leg.matchup_id, []))
        if winner is None:
            return Verdict.UNKNOWN
        return Verdict.WIN if winner == leg.roster_id else Verdict.LOSE

    if leg.type == LegType.PLAYER_TOP_POINTS:
        if outcome.top_player_id is None:
            return Verdict.UNKNOWN
        return Verdict.WIN if outcome.top_player_id == leg.player_id else Verdict.LOSE

    if leg.type == LegType.TEAM_TOP_POINTS:
        if outcome.top_roster_id is None:
            return Verdict.UNKNOWN
        return Verdict.WIN if outcome.top_roster_id == leg.roster_id else Verdict.LOSE

    return Verdict.UNKNOWN


def evaluate_legs(legs: Iterable[Leg], outcome: WeekOutcome) -> Verdict:
    # generator keeps evaluation lazy: fold_verdicts stops pulling on LOSE/UNKNOWN
    return fold_verdicts(evaluate_leg(leg, outcome) for leg in legs)
