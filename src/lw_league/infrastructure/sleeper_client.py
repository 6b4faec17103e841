"""SleeperClient — httpx implementation of LeagueDataProvider.

Thin adapter: every call is one GET, parsed into domain models. Transport
errors, non-2xx responses and payloads of the wrong shape all surface as
DataUnavailableError so callers can skip and retry later.
"""

import logging
from typing import Any

import httpx

from config.settings import settings
from src.lw_common.errors import DataUnavailableError
from src.lw_league.domain.models import (
    LeagueState,
    LeagueUser,
    MatchupEntry,
    PlayerInfo,
    Roster,
    WeeklyResult,
)

logger = logging.getLogger("lw.provider")

_PROJECTION_POSITIONS = ("QB", "RB", "WR", "TE", "K", "DEF", "FLEX", "REC_FLEX")


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_matchup_entry(raw: dict[str, Any]) -> MatchupEntry:
    roster_id = _as_int(raw.get("roster_id"))
    raw_points = raw.get("players_points")
    raw_starters = raw.get("starters")
    players_points = {
        str(pid): _as_float(pts)
        for pid, pts in (raw_points if isinstance(raw_points, dict) else {}).items()
    }
    return MatchupEntry(
        # roster ids start at 1; 0 is never a real roster
        roster_id=roster_id or None,
        matchup_id=_as_int(raw.get("matchup_id")),
        points=_as_float(raw.get("points")),
        starters=[
            str(pid) for pid in (raw_starters if isinstance(raw_starters, list) else []) if pid
        ],
        players_points=players_points,
    )


def _objects(rows: list[Any]) -> list[dict[str, Any]]:
    """Rows of a list payload that are JSON objects; anything else is dropped."""
    return [row for row in rows if isinstance(row, dict)]


def parse_player(player_id: str, raw: dict[str, Any]) -> PlayerInfo:
    name = f"{raw.get('first_name') or ''} {raw.get('last_name') or ''}".strip()
    return PlayerInfo(
        player_id=player_id,
        name=name or raw.get("full_name") or "Unknown",
        position=raw.get("position") or "",
        team=raw.get("team") or "",
    )


class SleeperClient:
    """Concrete provider for one league."""

    def __init__(
        self,
        league_id: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._league_id = league_id or settings.LEAGUE_ID
        self._client = client or httpx.AsyncClient(
            timeout=settings.PROVIDER_TIMEOUT_SECONDS
        )
        self._players_cache: dict[str, PlayerInfo] | None = None

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, url: str, params: Any = None) -> Any:
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("provider request failed: %s (%s)", url, exc)
            raise DataUnavailableError(f"GET {url} failed") from exc

    def _league_url(self, path: str) -> str:
        return f"{settings.PROVIDER_BASE_URL}/league/{self._league_id}/{path}"

    async def get_state(self) -> LeagueState:
        data = await self._get_json(f"{settings.PROVIDER_BASE_URL}/state/nfl")
        if not isinstance(data, dict):
            raise DataUnavailableError("state payload is not an object")
        season = data.get("season")
        return LeagueState(
            week=_as_int(data.get("week")),
            season=str(season) if season is not None else None,
        )

    async def lookup_user(self, username: str) -> LeagueUser:
        data = await self._get_json(f"{settings.PROVIDER_BASE_URL}/user/{username}")
        if not isinstance(data, dict) or not data.get("user_id"):
            raise DataUnavailableError(f"unknown user {username}")
        return LeagueUser(
            user_id=str(data["user_id"]),
            username=data.get("username") or username,
            display_name=data.get("display_name") or data.get("username") or username,
        )

    async def get_users(self) -> list[LeagueUser]:
        data = await self._get_json(self._league_url("users"))
        if not isinstance(data, list):
            raise DataUnavailableError("users payload is not a list")
        return [
            LeagueUser(
                user_id=str(u["user_id"]),
                username=u.get("username") or "",
                display_name=u.get("display_name") or u.get("username") or "",
            )
            for u in _objects(data)
            if u.get("user_id")
        ]

    async def get_rosters(self) -> list[Roster]:
        data = await self._get_json(self._league_url("rosters"))
        if not isinstance(data, list):
            raise DataUnavailableError("rosters payload is not a list")
        rosters = []
        for r in _objects(data):
            roster_id = _as_int(r.get("roster_id"))
            if roster_id is None:
                continue
            owner = r.get("owner_id")
            rosters.append(Roster(roster_id=roster_id, owner_id=str(owner) if owner else None))
        return rosters

    async def get_matchups(self, week: int) -> WeeklyResult:
        data = await self._get_json(self._league_url(f"matchups/{week}"))
        if not isinstance(data, list):
            raise DataUnavailableError(f"matchups payload for week {week} is not a list")
        return WeeklyResult(week=week, entries=[parse_matchup_entry(m) for m in _objects(data)])

    async def get_projections(self, season: str, week: int) -> list[dict[str, Any]]:
        params: list[tuple[str, str]] = [("season_type", "regular")]
        params += [("position[]", pos) for pos in _PROJECTION_POSITIONS]
        params.append(("order_by", "ppr"))
        data = await self._get_json(
            f"{settings.PROVIDER_PROJECTIONS_BASE_URL}/{season}/{week}", params=params
        )
        if not isinstance(data, list):
            raise DataUnavailableError("projections payload is not a list")
        return _objects(data)

    async def get_players(self) -> dict[str, PlayerInfo]:
        # Multi-megabyte payload; fetched once per process
        if self._players_cache is None:
            data = await self._get_json(f"{settings.PROVIDER_BASE_URL}/players/nfl")
            if not isinstance(data, dict):
                raise DataUnavailableError("players payload is not an object")
            self._players_cache = {
                str(pid): parse_player(str(pid), raw)
                for pid, raw in data.items()
                if isinstance(raw, dict)
            }
        return self._players_cache

    async def get_player_weekly_stats(
        self, player_id: str, season: str
    ) -> dict[str, Any]:
        data = await self._get_json(
            f"{settings.PROVIDER_STATS_BASE_URL}/{player_id}",
            params={"season_type": "regular", "season": season, "grouping": "week"},
        )
        return data if isinstance(data, dict) else {}


_provider: SleeperClient | None = None


def get_provider() -> SleeperClient:
    """Get or create the process-wide provider client."""
    global _provider  # noqa: PLW0603
    if _provider is None:
        _provider = SleeperClient()
    return _provider


async def close_provider() -> None:
    global _provider  # noqa: PLW0603
    if _provider is not None:
        await _provider.aclose()
        _provider = None
