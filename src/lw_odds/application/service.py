"""OddsApplicationService — prices the current week's board.

Pulls league data from the provider, runs the pure pricing functions and
caches the resulting board in Redis so slip additions and page loads do not
refetch the provider on every call.
"""

import asyncio
import logging

import redis.asyncio as aioredis

from config.settings import settings
from src.lw_common.errors import DataUnavailableError, WeekNotAvailableError
from src.lw_common.redis_client import get_redis
from src.lw_league.domain.matchups import group_by_matchup
from src.lw_league.domain.models import LeagueUser, Roster
from src.lw_league.domain.provider import LeagueDataProvider
from src.lw_league.infrastructure.sleeper_client import get_provider
from src.lw_odds.application.schemas import (
    MatchupBoardItem,
    MatchupSide,
    OddsBoardResponse,
    PlayerOddsItem,
    TeamOddsItem,
)
from src.lw_odds.domain.models import PlayerProjection, TeamProjection
from src.lw_odds.domain.pricing import (
    matchup_odds,
    player_top_score_odds,
    team_top_score_odds,
)
from src.lw_odds.domain.projections import (
    average_points_before_week,
    build_player_projection_map,
    build_roster_projection_map,
    select_prop_candidates,
)

logger = logging.getLogger("lw.odds")

_HISTORY_CONCURRENCY = 8


def board_cache_key(league_id: str, week: int) -> str:
    return f"odds:board:{league_id}:{week}"


def _roster_names(users: list[LeagueUser], rosters: list[Roster]) -> dict[int, tuple[str | None, str]]:
    """roster_id -> (owner_id, display name)."""
    names_by_user = {u.user_id: u.display_name for u in users}
    return {
        r.roster_id: (
            r.owner_id,
            names_by_user.get(r.owner_id or "", "") or f"Team {r.roster_id}",
        )
        for r in rosters
    }


class OddsApplicationService:
    def __init__(
        self,
        provider: LeagueDataProvider | None = None,
        redis: aioredis.Redis | None = None,
    ) -> None:
        self._provider = provider
        self._redis = redis

    @property
    def provider(self) -> LeagueDataProvider:
        return self._provider if self._provider is not None else get_provider()

    async def _get_redis(self) -> aioredis.Redis:
        return self._redis if self._redis is not None else await get_redis()

    async def get_board(self) -> OddsBoardResponse:
        state = await self.provider.get_state()
        if not state.has_week or not state.season:
            raise WeekNotAvailableError()
        week = state.week or 0

        redis = await self._get_redis()
        key = board_cache_key(settings.LEAGUE_ID, week)
        cached = await redis.get(key)
        if cached:
            return OddsBoardResponse.model_validate_json(cached)

        board = await self.build_board(week, state.season)
        await redis.set(key, board.model_dump_json(), ex=settings.ODDS_BOARD_TTL_SECONDS)
        return board

    async def build_board(self, week: int, season: str) -> OddsBoardResponse:
        users, rosters, result, projection_rows = await asyncio.gather(
            self.provider.get_users(),
            self.provider.get_rosters(),
            self.provider.get_matchups(week),
            self.provider.get_projections(season, week),
        )
        names = _roster_names(users, rosters)
        player_projections = build_player_projection_map(projection_rows)
        roster_projections = build_roster_projection_map(result.entries, player_projections)

        def side(roster_id: int, odds: float) -> MatchupSide:
            owner_id, display_name = names.get(roster_id, (None, f"Team {roster_id}"))
            return MatchupSide(
                roster_id=roster_id,
                owner_id=owner_id,
                display_name=display_name,
                projected_points=roster_projections.get(roster_id, 0.0),
                odds=odds,
            )

        matchups = []
        for matchup_id, entries in group_by_matchup(result.entries).items():
            if len(entries) < 2 or entries[0].roster_id is None or entries[1].roster_id is None:
                continue
            a, b = entries[0].roster_id, entries[1].roster_id
            odds = matchup_odds(roster_projections.get(a), roster_projections.get(b))
            matchups.append(
                MatchupBoardItem(
                    matchup_id=matchup_id,
                    side_a=side(a, odds.odds_a),
                    side_b=side(b, odds.odds_b),
                )
            )

        team_prices = team_top_score_odds(
            [TeamProjection(roster_id=rid, projected_points=pts) for rid, pts in roster_projections.items()]
        )
        teams = [
            TeamOddsItem(
                roster_id=rid,
                display_name=names.get(rid, (None, f"Team {rid}"))[1],
                projected_points=roster_projections[rid],
                odds=price,
            )
            for rid, price in team_prices.items()
        ]

        players = await self._price_players(result.entries, player_projections, season, week)
        logger.info(
            "priced week %d board: %d matchups, %d teams, %d players",
            week, len(matchups), len(teams), len(players),
        )
        return OddsBoardResponse(
            week=week, season=season, matchups=matchups, teams=teams, players=players
        )

    async def _price_players(
        self,
        entries: list,
        player_projections: dict[str, float],
        season: str,
        week: int,
    ) -> list[PlayerOddsItem]:
        try:
            players = await self.provider.get_players()
        except DataUnavailableError:
            logger.warning("player metadata unavailable; player market closed for week %d", week)
            return []

        candidates = select_prop_candidates(entries, players, player_projections)
        await self._enrich_with_history(candidates, season, week)
        prices = player_top_score_odds(candidates)
        return [
            PlayerOddsItem(
                player_id=c.player_id,
                name=c.name,
                position=c.position,
                team=c.team,
                projected_points=c.projected_points or 0.0,
                historical_average=c.historical_average,
                odds=prices[c.player_id],
            )
            for c in candidates
            if c.player_id in prices
        ]

    async def _enrich_with_history(
        self, candidates: list[PlayerProjection], season: str, week: int
    ) -> None:
        if week <= 1:
            return
        semaphore = asyncio.Semaphore(_HISTORY_CONCURRENCY)

        async def enrich(candidate: PlayerProjection) -> None:
            async with semaphore:
                try:
                    stats = await self.provider.get_player_weekly_stats(candidate.player_id, season)
                except DataUnavailableError:
                    return
            candidate.historical_average = average_points_before_week(stats, week)

        await asyncio.gather(*(enrich(c) for c in candidates))
