"""WalletRepository — concrete implementation of WalletRepositoryProtocol.

Every balance mutation is a single atomic PostgreSQL UPDATE ... RETURNING, so
a concurrent placement and settlement on the same wallet can never lose an
update. A result of 0 rows means a precondition failed (insufficient funds,
or a wager that is no longer open).

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

import json
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.lw_common.enums import LedgerEntryType, WagerStatus
from src.lw_common.errors import InsufficientFundsError, InternalError, WalletNotFoundError
from src.lw_common.money import to_odds
from src.lw_slip.domain.models import Leg
from src.lw_wallet.domain.ledger_rules import SettlementDelta
from src.lw_wallet.domain.models import LedgerEntry, Wager, Wallet

_WALLET_COLUMNS = """id, league_id, participant_id, display_name, balance,
              starting_bankroll, pnl, version, created_at, updated_at"""

_WAGER_COLUMNS = """id, league_id, participant_id, wallet_id, week, stake,
              combined_odds, type, status, legs, payout, created_at, settled_at"""

# ---------------------------------------------------------------------------
# SQL: wallets
# ---------------------------------------------------------------------------

_GET_WALLET_SQL = text(f"""
    SELECT {_WALLET_COLUMNS}
    FROM wallets
    WHERE league_id = :league_id AND participant_id = :participant_id
""")

# xmax = 0 only on the row version this statement inserted
_GET_OR_CREATE_WALLET_SQL = text(f"""
    INSERT INTO wallets
        (league_id, participant_id, display_name, balance, starting_bankroll, pnl)
    VALUES
        (:league_id, :participant_id, :display_name, :bankroll, :bankroll, 0)
    ON CONFLICT (league_id, participant_id) DO UPDATE
        SET display_name = EXCLUDED.display_name
    RETURNING {_WALLET_COLUMNS}, (xmax = 0) AS inserted
""")

_DEBIT_STAKE_SQL = text(f"""
    UPDATE wallets
    SET balance = balance - :stake,
        version = version + 1
    WHERE league_id = :league_id
      AND participant_id = :participant_id
      AND balance >= :stake
    RETURNING {_WALLET_COLUMNS}
""")

_APPLY_SETTLEMENT_SQL = text("""
    UPDATE wallets
    SET balance = balance + :balance_delta,
        pnl = pnl + :pnl_delta,
        version = version + 1
    WHERE id = :wallet_id
    RETURNING id, balance
""")

_LIST_WALLETS_SQL = text(f"""
    SELECT {_WALLET_COLUMNS}
    FROM wallets
    WHERE league_id = :league_id
    ORDER BY balance DESC, created_at ASC
""")

# ---------------------------------------------------------------------------
# SQL: wagers
# ---------------------------------------------------------------------------

_INSERT_WAGER_SQL = text(f"""
    INSERT INTO wagers
        (league_id, participant_id, wallet_id, week, stake,
         combined_odds, type, status, legs)
    VALUES
        (:league_id, :participant_id, :wallet_id, :week, :stake,
         :combined_odds, :type, 'open', CAST(:legs AS JSONB))
    RETURNING {_WAGER_COLUMNS}
""")

# Compare-and-swap on status: only one settlement pass can win this row
_SETTLE_WAGER_SQL = text("""
    UPDATE wagers
    SET status = :status,
        payout = :payout,
        settled_at = NOW()
    WHERE id = :wager_id AND status = 'open'
    RETURNING id, wallet_id
""")

_LIST_OPEN_WAGERS_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE league_id = :league_id AND status = 'open'
    ORDER BY created_at ASC
""")

_LIST_PARTICIPANT_WAGERS_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE league_id = :league_id AND participant_id = :participant_id
    ORDER BY created_at DESC
    LIMIT :limit
""")

_LIST_RECENT_WAGERS_SQL = text(f"""
    SELECT {_WAGER_COLUMNS}
    FROM wagers
    WHERE league_id = :league_id AND status = ANY(:statuses)
    ORDER BY COALESCE(settled_at, created_at) DESC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# SQL: ledger
# ---------------------------------------------------------------------------

_INSERT_LEDGER_SQL = text("""
    INSERT INTO ledger_entries
        (wallet_id, entry_type, amount, balance_after, wager_id, description)
    VALUES
        (:wallet_id, :entry_type, :amount, :balance_after, :wager_id, :description)
    RETURNING id
""")

_LIST_LEDGER_SQL = text("""
    SELECT id, wallet_id, entry_type, amount, balance_after,
           wager_id, description, created_at
    FROM ledger_entries
    WHERE wallet_id = :wallet_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_wallet(row: object) -> Wallet:
    return Wallet(
        id=str(row.id),  # type: ignore[attr-defined]
        league_id=row.league_id,  # type: ignore[attr-defined]
        participant_id=row.participant_id,  # type: ignore[attr-defined]
        display_name=row.display_name,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        starting_bankroll=row.starting_bankroll,  # type: ignore[attr-defined]
        pnl=row.pnl,  # type: ignore[attr-defined]
        version=row.version,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _decode_legs(raw: object) -> list[Leg]:
    # asyncpg hands JSONB back as text unless a codec is registered
    items = json.loads(raw) if isinstance(raw, (str, bytes)) else (raw or [])
    return [Leg.from_dict(item) for item in items]  # type: ignore[union-attr]


def _row_to_wager(row: object) -> Wager:
    return Wager(
        id=str(row.id),  # type: ignore[attr-defined]
        league_id=row.league_id,  # type: ignore[attr-defined]
        participant_id=row.participant_id,  # type: ignore[attr-defined]
        wallet_id=str(row.wallet_id),  # type: ignore[attr-defined]
        week=row.week,  # type: ignore[attr-defined]
        stake=row.stake,  # type: ignore[attr-defined]
        combined_odds=to_odds(row.combined_odds),  # type: ignore[attr-defined]
        type=row.type,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        legs=_decode_legs(row.legs),  # type: ignore[attr-defined]
        payout=row.payout,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        settled_at=row.settled_at,  # type: ignore[attr-defined]
    )


def _row_to_ledger(row: object) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        wallet_id=str(row.wallet_id),  # type: ignore[attr-defined]
        entry_type=row.entry_type,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        balance_after=row.balance_after,  # type: ignore[attr-defined]
        wager_id=str(row.wager_id) if row.wager_id else None,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class WalletRepository:
    """Concrete repository — all operations atomic at the SQL level."""

    async def _write_ledger(
        self,
        db: AsyncSession,
        wallet_id: str,
        entry_type: LedgerEntryType,
        amount: int,
        balance_after: int,
        wager_id: str | None,
        description: str,
    ) -> None:
        result = await db.execute(
            _INSERT_LEDGER_SQL,
            {
                "wallet_id": wallet_id,
                "entry_type": entry_type.value,
                "amount": amount,
                "balance_after": balance_after,
                "wager_id": wager_id,
                "description": description,
            },
        )
        if result.fetchone() is None:
            raise InternalError("Ledger insert returned no rows")

    async def get_wallet(
        self, db: AsyncSession, league_id: str, participant_id: str
    ) -> Wallet | None:
        result = await db.execute(
            _GET_WALLET_SQL, {"league_id": league_id, "participant_id": participant_id}
        )
        row = result.fetchone()
        return _row_to_wallet(row) if row else None

    async def get_or_create_wallet(
        self,
        db: AsyncSession,
        league_id: str,
        participant_id: str,
        display_name: str,
        bankroll: int,
    ) -> tuple[Wallet, bool]:
        result = await db.execute(
            _GET_OR_CREATE_WALLET_SQL,
            {
                "league_id": league_id,
                "participant_id": participant_id,
                "display_name": display_name,
                "bankroll": bankroll,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Wallet upsert returned no rows")
        wallet = _row_to_wallet(row)
        created = bool(row.inserted)
        if created:
            await self._write_ledger(
                db,
                wallet.id,
                LedgerEntryType.WALLET_GRANT,
                wallet.starting_bankroll,
                wallet.balance,
                None,
                "Starting bankroll",
            )
        return wallet, created

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
    ) -> tuple[Wallet, Wager]:
        result = await db.execute(
            _DEBIT_STAKE_SQL,
            {"league_id": league_id, "participant_id": participant_id, "stake": stake},
        )
        row = result.fetchone()
        if row is None:
            current = await self.get_wallet(db, league_id, participant_id)
            if current is None:
                raise WalletNotFoundError(participant_id)
            raise InsufficientFundsError(stake, current.balance)
        wallet = _row_to_wallet(row)

        wager_result = await db.execute(
            _INSERT_WAGER_SQL,
            {
                "league_id": league_id,
                "participant_id": participant_id,
                "wallet_id": wallet.id,
                "week": week,
                "stake": stake,
                "combined_odds": combined_odds,
                "type": wager_type,
                "legs": json.dumps([leg.to_dict() for leg in legs]),
            },
        )
        wager_row = wager_result.fetchone()
        if wager_row is None:
            raise InternalError("Wager insert returned no rows")
        wager = _row_to_wager(wager_row)

        await self._write_ledger(
            db,
            wallet.id,
            LedgerEntryType.WAGER_STAKE,
            -stake,
            wallet.balance,
            wager.id,
            f"Stake on week {week} {wager_type}",
        )
        return wallet, wager

    async def settle_wager(
        self,
        db: AsyncSession,
        wager: Wager,
        status: str,
        delta: SettlementDelta,
    ) -> bool:
        """Move an open wager to a terminal status and apply its wallet delta.

        Returns False, touching nothing, when the wager was no longer open.
        """
        result = await db.execute(
            _SETTLE_WAGER_SQL,
            {"wager_id": wager.id, "status": status, "payout": delta.payout},
        )
        row = result.fetchone()
        if row is None:
            return False

        wallet_result = await db.execute(
            _APPLY_SETTLEMENT_SQL,
            {
                "wallet_id": str(row.wallet_id),
                "balance_delta": delta.balance,
                "pnl_delta": delta.pnl,
            },
        )
        wallet_row = wallet_result.fetchone()
        if wallet_row is None:
            raise InternalError(f"Wallet {row.wallet_id} missing for wager {wager.id}")

        if status == WagerStatus.WON and delta.balance > 0:
            await self._write_ledger(
                db,
                str(row.wallet_id),
                LedgerEntryType.WAGER_PAYOUT,
                delta.balance,
                wallet_row.balance,
                wager.id,
                f"Payout for week {wager.week} {wager.type}",
            )
        return True

    async def list_open_wagers(self, db: AsyncSession, league_id: str) -> list[Wager]:
        result = await db.execute(_LIST_OPEN_WAGERS_SQL, {"league_id": league_id})
        return [_row_to_wager(r) for r in result.fetchall()]

    async def list_wagers(
        self, db: AsyncSession, league_id: str, participant_id: str, limit: int
    ) -> list[Wager]:
        result = await db.execute(
            _LIST_PARTICIPANT_WAGERS_SQL,
            {"league_id": league_id, "participant_id": participant_id, "limit": limit},
        )
        return [_row_to_wager(r) for r in result.fetchall()]

    async def list_recent_wagers(
        self, db: AsyncSession, league_id: str, statuses: list[str], limit: int
    ) -> list[Wager]:
        result = await db.execute(
            _LIST_RECENT_WAGERS_SQL,
            {"league_id": league_id, "statuses": statuses, "limit": limit},
        )
        return [_row_to_wager(r) for r in result.fetchall()]

    async def list_wallets(self, db: AsyncSession, league_id: str) -> list[Wallet]:
        result = await db.execute(_LIST_WALLETS_SQL, {"league_id": league_id})
        return [_row_to_wallet(r) for r in result.fetchall()]

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        wallet_id: str,
        cursor_id: int | None,
        limit: int,
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LIST_LEDGER_SQL,
            {"wallet_id": wallet_id, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_ledger(r) for r in result.fetchall()]
