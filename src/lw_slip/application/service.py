"""SlipApplicationService — per-participant slip mutations.

Leg odds are looked up on the current odds board at the moment the leg is
added and snapshotted into the leg; the caller only names the selection.
"""

import redis.asyncio as aioredis

from src.lw_common.errors import (
    SelectionNotOfferedError,
    SlipLegNotFoundError,
    StaleSlipError,
)
from src.lw_common.money import to_odds
from src.lw_common.redis_client import get_redis
from src.lw_odds.application.schemas import OddsBoardResponse
from src.lw_odds.application.service import OddsApplicationService
from src.lw_slip.application.schemas import (
    AddMatchWinnerLeg,
    AddPlayerTopLeg,
    AddTeamTopLeg,
    SlipResponse,
)
from src.lw_slip.domain.models import BetSlip
from src.lw_slip.infrastructure.slip_store import SlipStore


def _matchup_label(board: OddsBoardResponse, matchup_id: int, roster_id: int) -> str | None:
    for m in board.matchups:
        if m.matchup_id == matchup_id:
            for side in (m.side_a, m.side_b):
                if side.roster_id == roster_id:
                    return f"{side.display_name} | Win"
    return None


class SlipApplicationService:
    def __init__(
        self,
        odds_service: OddsApplicationService | None = None,
        redis: aioredis.Redis | None = None,
    ) -> None:
        self._odds = odds_service or OddsApplicationService()
        self._redis = redis

    async def _store(self) -> SlipStore:
        redis = self._redis if self._redis is not None else await get_redis()
        return SlipStore(redis)

    async def load_slip(self, participant_id: str) -> BetSlip:
        return await (await self._store()).load(participant_id)

    async def get_slip(self, participant_id: str, stake_cents: int | None = None) -> SlipResponse:
        slip = await self.load_slip(participant_id)
        return SlipResponse.from_slip(participant_id, slip, stake_cents)

    async def add_leg(
        self,
        participant_id: str,
        request: AddMatchWinnerLeg | AddTeamTopLeg | AddPlayerTopLeg,
    ) -> SlipResponse:
        board = await self._odds.get_board()
        store = await self._store()
        slip = await store.load(participant_id)
        if slip.is_empty:
            slip.week = board.week
        elif slip.week != board.week:
            # matchup ids repeat every week, so old legs cannot join this board
            raise StaleSlipError(slip.week, board.week)

        if isinstance(request, AddMatchWinnerLeg):
            odds = board.matchup_side_odds(request.matchup_id, request.roster_id)
            if odds is None:
                raise SelectionNotOfferedError(
                    f"matchup {request.matchup_id} roster {request.roster_id}"
                )
            changed = slip.add_match_winner(
                request.matchup_id,
                request.roster_id,
                to_odds(odds),
                _matchup_label(board, request.matchup_id, request.roster_id),
            )
        elif isinstance(request, AddTeamTopLeg):
            odds = board.team_odds(request.roster_id)
            if odds is None:
                raise SelectionNotOfferedError(f"top team roster {request.roster_id}")
            name = next(t.display_name for t in board.teams if t.roster_id == request.roster_id)
            changed = slip.add_team_top(
                request.roster_id, to_odds(odds), f"{name} | Top Scoring Team"
            )
        else:
            odds = board.player_odds(request.player_id)
            if odds is None:
                raise SelectionNotOfferedError(f"top scorer {request.player_id}")
            name = next(p.name for p in board.players if p.player_id == request.player_id)
            changed = slip.add_player_top(
                request.player_id, to_odds(odds), f"{name} | Top Scorer"
            )

        if changed:
            await store.save(participant_id, slip)
        return SlipResponse.from_slip(participant_id, slip)

    async def remove_leg(self, participant_id: str, index: int) -> SlipResponse:
        store = await self._store()
        slip = await store.load(participant_id)
        try:
            slip.remove(index)
        except IndexError:
            raise SlipLegNotFoundError(index) from None
        await store.save(participant_id, slip)
        return SlipResponse.from_slip(participant_id, slip)

    async def clear_slip(self, participant_id: str) -> SlipResponse:
        store = await self._store()
        await store.clear(participant_id)
        return SlipResponse.from_slip(participant_id, BetSlip())
