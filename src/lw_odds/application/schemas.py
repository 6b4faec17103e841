"""Pydantic schemas for the lw_odds API."""

from pydantic import BaseModel


class MatchupSide(BaseModel):
    roster_id: int
    owner_id: str | None
    display_name: str
    projected_points: float
    odds: float


class MatchupBoardItem(BaseModel):
    matchup_id: int
    side_a: MatchupSide
    side_b: MatchupSide


class TeamOddsItem(BaseModel):
    roster_id: int
    display_name: str
    projected_points: float
    odds: float


class PlayerOddsItem(BaseModel):
    player_id: str
    name: str
    position: str
    team: str
    projected_points: float
    historical_average: float | None
    odds: float


class OddsBoardResponse(BaseModel):
    week: int
    season: str
    matchups: list[MatchupBoardItem]
    teams: list[TeamOddsItem]
    players: list[PlayerOddsItem]

    def matchup_side_odds(self, matchup_id: int, roster_id: int) -> float | None:
        for m in self.matchups:
            if m.matchup_id != matchup_id:
                continue
            for side in (m.side_a, m.side_b):
                if side.roster_id == roster_id:
                    return side.odds
        return None

    def team_odds(self, roster_id: int) -> float | None:
        return next((t.odds for t in self.teams if t.roster_id == roster_id), None)

    def player_odds(self, player_id: str) -> float | None:
        return next((p.odds for p in self.players if p.player_id == player_id), None)
