"""Provider Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the HTTP implementation. Every method raises
DataUnavailableError when the upstream cannot answer.
"""

from typing import Any, Protocol

from src.lw_league.domain.models import (
    LeagueState,
    LeagueUser,
    PlayerInfo,
    Roster,
    WeeklyResult,
)


class LeagueDataProvider(Protocol):
    async def get_state(self) -> LeagueState: ...

    async def lookup_user(self, username: str) -> LeagueUser: ...

    async def get_users(self) -> list[LeagueUser]: ...

    async def get_rosters(self) -> list[Roster]: ...

    async def get_matchups(self, week: int) -> WeeklyResult: ...

    async def get_projections(self, season: str, week: int) -> list[dict[str, Any]]: ...

    async def get_players(self) -> dict[str, PlayerInfo]: ...

    async def get_player_weekly_stats(
        self, player_id: str, season: str
    ) -> dict[str, Any]: ...
