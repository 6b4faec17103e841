"""Domain models for lw_odds — pure dataclasses, no I/O."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MatchupOdds:
    odds_a: float
    odds_b: float


@dataclass(frozen=True)
class TeamProjection:
    roster_id: int
    projected_points: float | None


@dataclass
class PlayerProjection:
    """A priced candidate in the top-scoring-player market."""

    player_id: str
    projected_points: float | None
    historical_average: float | None = None  # mean PPR over completed weeks
    name: str = ""
    position: str = ""
    team: str = ""
