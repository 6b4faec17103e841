"""WalletApplicationService — thin composition layer.

Combines repository calls with schema transformations. Mutations
(get_or_create, place_wager) commit on success and roll back on any error;
read models run without an explicit transaction.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import LockNotOwnedError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.lw_common.enums import WagerStatus
from src.lw_common.errors import (
    NotLeagueMemberError,
    PlacementInProgressError,
    StaleSlipError,
    WalletNotFoundError,
    WeekNotAvailableError,
)
from src.lw_common.money import cents_to_display
from src.lw_common.redis_client import get_redis
from src.lw_league.domain.provider import LeagueDataProvider
from src.lw_league.infrastructure.sleeper_client import get_provider
from src.lw_slip.application.service import SlipApplicationService
from src.lw_wallet.application.schemas import (
    LeaderboardItem,
    LeaderboardResponse,
    LedgerEntryItem,
    LedgerResponse,
    PlaceWagerResponse,
    RecentWagersResponse,
    SessionResponse,
    WagerItem,
    WagerListResponse,
    WalletResponse,
    cursor_decode,
    cursor_encode,
)
from src.lw_wallet.domain.ledger_rules import validate_placement
from src.lw_wallet.domain.repository import WalletRepositoryProtocol
from src.lw_wallet.infrastructure.persistence import WalletRepository

logger = logging.getLogger("lw.wallet")

RECENT_ACTIVITY_LIMIT = 10


def placement_lock_key(league_id: str, participant_id: str) -> str:
    return f"placement:{league_id}:{participant_id}"


class WalletApplicationService:
    def __init__(
        self,
        repo: WalletRepositoryProtocol | None = None,
        slip_service: SlipApplicationService | None = None,
        provider: LeagueDataProvider | None = None,
        redis: aioredis.Redis | None = None,
        league_id: str | None = None,
    ) -> None:
        self._repo: WalletRepositoryProtocol = repo or WalletRepository()
        self._slips = slip_service or SlipApplicationService(redis=redis)
        self._provider = provider
        self._redis = redis
        self._league_id = league_id or settings.LEAGUE_ID

    def _get_provider(self) -> LeagueDataProvider:
        return self._provider if self._provider is not None else get_provider()

    async def _get_redis(self) -> aioredis.Redis:
        return self._redis if self._redis is not None else await get_redis()

    async def start_session(self, db: AsyncSession, username: str) -> SessionResponse:
        provider = self._get_provider()
        user = await provider.lookup_user(username)
        members = await provider.get_users()
        if user.user_id not in {m.user_id for m in members}:
            logger.info("Session refused: %s (%s) is not in the league", username, user.user_id)
            raise NotLeagueMemberError(username)
        try:
            wallet, created = await self._repo.get_or_create_wallet(
                db,
                self._league_id,
                user.user_id,
                user.display_name,
                settings.DEFAULT_BANKROLL_CENTS,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        if created:
            logger.info(
                "Wallet created: participant=%s bankroll=%d", user.user_id, wallet.balance
            )
        return SessionResponse(wallet=WalletResponse.from_wallet(wallet), created=created)

    async def get_wallet(self, db: AsyncSession, participant_id: str) -> WalletResponse:
        wallet = await self._repo.get_wallet(db, self._league_id, participant_id)
        if wallet is None:
            raise WalletNotFoundError(participant_id)
        return WalletResponse.from_wallet(wallet)

    async def place_wager(
        self, db: AsyncSession, participant_id: str, stake_cents: int
    ) -> PlaceWagerResponse:
        """Turn the participant's slip into an open wager.

        A token-owned Redis lock rejects a second submission while the first
        is in flight, and is only released by the request that holds it. The
        debit itself is still a conditional UPDATE, so the balance stays
        correct even if the guard expires early.
        """
        redis = await self._get_redis()
        guard = redis.lock(
            placement_lock_key(self._league_id, participant_id),
            timeout=settings.PLACEMENT_LOCK_SECONDS,
            blocking=False,
        )
        if not await guard.acquire():
            raise PlacementInProgressError(participant_id)
        try:
            return await self._place_wager_locked(db, participant_id, stake_cents)
        finally:
            try:
                await guard.release()
            except LockNotOwnedError:
                logger.warning(
                    "Placement guard expired before release: participant=%s", participant_id
                )

    async def _place_wager_locked(
        self, db: AsyncSession, participant_id: str, stake_cents: int
    ) -> PlaceWagerResponse:
        slip = await self._slips.load_slip(participant_id)
        wallet = await self._repo.get_wallet(db, self._league_id, participant_id)
        if wallet is None:
            raise WalletNotFoundError(participant_id)
        validate_placement(wallet.balance, stake_cents, slip.legs)

        state = await self._get_provider().get_state()
        if not state.has_week:
            raise WeekNotAvailableError()
        if slip.week != state.week:
            raise StaleSlipError(slip.week, state.week)

        try:
            wallet, wager = await self._repo.place_wager(
                db,
                self._league_id,
                participant_id,
                state.week or 0,
                stake_cents,
                slip.combined_odds,
                slip.slip_type or "",
                list(slip.legs),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._slips.clear_slip(participant_id)
        logger.info(
            "Wager placed: participant=%s wager=%s week=%d stake=%d odds=%s",
            participant_id,
            wager.id,
            wager.week,
            wager.stake,
            wager.combined_odds,
        )
        return PlaceWagerResponse(
            wager=WagerItem.from_wager(wager),
            balance_cents=wallet.balance,
            balance_display=cents_to_display(wallet.balance),
        )

    async def list_wagers(
        self, db: AsyncSession, participant_id: str, limit: int
    ) -> WagerListResponse:
        wagers = await self._repo.list_wagers(db, self._league_id, participant_id, limit)
        return WagerListResponse(items=[WagerItem.from_wager(w) for w in wagers])

    async def list_ledger(
        self,
        db: AsyncSession,
        participant_id: str,
        cursor: str | None,
        limit: int,
    ) -> LedgerResponse:
        wallet = await self._repo.get_wallet(db, self._league_id, participant_id)
        if wallet is None:
            raise WalletNotFoundError(participant_id)
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_ledger_entries(db, wallet.id, cursor_id, limit + 1)
        has_more = len(entries) > limit
        page = entries[:limit]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return LedgerResponse(
            items=[LedgerEntryItem.from_entry(e) for e in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def leaderboard(self, db: AsyncSession) -> LeaderboardResponse:
        wallets = await self._repo.list_wallets(db, self._league_id)
        return LeaderboardResponse(
            items=[
                LeaderboardItem(
                    rank=i,
                    participant_id=w.participant_id,
                    display_name=w.display_name,
                    balance_cents=w.balance,
                    balance_display=cents_to_display(w.balance),
                    pnl_cents=w.pnl,
                    pnl_display=cents_to_display(w.pnl),
                )
                for i, w in enumerate(wallets, start=1)
            ]
        )

    async def recent_activity(self, db: AsyncSession) -> RecentWagersResponse:
        settled = await self._repo.list_recent_wagers(
            db,
            self._league_id,
            [WagerStatus.WON.value, WagerStatus.LOST.value],
            RECENT_ACTIVITY_LIMIT,
        )
        pending = await self._repo.list_recent_wagers(
            db, self._league_id, [WagerStatus.OPEN.value], RECENT_ACTIVITY_LIMIT
        )
        return RecentWagersResponse(
            settled=[WagerItem.from_wager(w) for w in settled],
            open=[WagerItem.from_wager(w) for w in pending],
        )
