"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.lw_slip.domain.models import Leg
from src.lw_wallet.domain.ledger_rules import SettlementDelta
from src.lw_wallet.domain.models import LedgerEntry, Wager, Wallet


class WalletRepositoryProtocol(Protocol):
    async def get_wallet(
        self, db: AsyncSession, league_id: str, participant_id: str
    ) -> Wallet | None: ...

    async def get_or_create_wallet(
        self,
        db: AsyncSession,
        league_id: str,
        participant_id: str,
        display_name: str,
        bankroll: int,
    ) -> tuple[Wallet, bool]: ...

    async def place_wager(
        self,
        db: AsyncSession,
        league_id: str,
        participant_id: str,
        week: int,
        stake: int,
        combined_odds: Decimal,
        wager_type: str,
        legs: list[Leg],
    ) -> tuple[Wallet, Wager]: ...

    async def settle_wager(
        self,
        db: AsyncSession,
        wager: Wager,
        status: str,
        delta: SettlementDelta,
    ) -> bool: ...

    async def list_open_wagers(self, db: AsyncSession, league_id: str) -> list[Wager]: ...

    async def list_wagers(
        self, db: AsyncSession, league_id: str, participant_id: str, limit: int
    ) -> list[Wager]: ...

    async def list_recent_wagers(
        self, db: AsyncSession, league_id: str, statuses: list[str], limit: int
    ) -> list[Wager]: ...

    async def list_wallets(self, db: AsyncSession, league_id: str) -> list[Wallet]: ...

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        wallet_id: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[LedgerEntry]: ...
