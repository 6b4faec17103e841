"""Domain models for lw_league — read-only views of provider data."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LeagueState:
    week: int | None
    season: str | None

    @property
    def has_week(self) -> bool:
        return self.week is not None and self.week > 0


@dataclass(frozen=True)
class LeagueUser:
    user_id: str
    username: str
    display_name: str


@dataclass(frozen=True)
class Roster:
    roster_id: int
    owner_id: str | None


@dataclass
class MatchupEntry:
    """One roster's side of a weekly matchup."""

    roster_id: int | None
    matchup_id: int | None
    points: float | None = None
    starters: list[str] = field(default_factory=list)
    players_points: dict[str, float | None] = field(default_factory=dict)


@dataclass
class WeeklyResult:
    """Matchup entries for one week, in provider order."""

    week: int
    entries: list[MatchupEntry]


@dataclass(frozen=True)
class PlayerInfo:
    player_id: str
    name: str
    position: str
    team: str
