"""Unit tests for WalletRepository using MagicMock AsyncSession."""

import json
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.lw_common.errors import InsufficientFundsError, WalletNotFoundError
from src.lw_slip.domain.models import Leg
from src.lw_wallet.domain.ledger_rules import settle_lost, settle_won
from src.lw_wallet.domain.models import Wager
from src.lw_wallet.infrastructure.persistence import WalletRepository


def _wallet_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", "w-1")
    row.league_id = kwargs.get("league_id", "L1")
    row.participant_id = kwargs.get("participant_id", "u-1")
    row.display_name = kwargs.get("display_name", "Alpha")
    row.balance = kwargs.get("balance", 100000)
    row.starting_bankroll = kwargs.get("starting_bankroll", 100000)
    row.pnl = kwargs.get("pnl", 0)
    row.version = kwargs.get("version", 0)
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    row.inserted = kwargs.get("inserted", False)
    return row


def _wager_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", "wg-1")
    row.league_id = "L1"
    row.participant_id = "u-1"
    row.wallet_id = "w-1"
    row.week = kwargs.get("week", 5)
    row.stake = kwargs.get("stake", 1000)
    row.combined_odds = kwargs.get("combined_odds", Decimal("2.5"))
    row.type = "match_winner"
    row.status = kwargs.get("status", "open")
    row.legs = kwargs.get(
        "legs",
        json.dumps([{"type": "match_winner", "decimal_odds": "2.5", "matchup_id": 1, "roster_id": 2}]),
    )
    row.payout = None
    row.created_at = datetime.now(UTC)
    row.settled_at = None
    return row


def _result(row):
    result = MagicMock()
    result.fetchone.return_value = row
    return result


def _wager() -> Wager:
    return Wager(
        id="wg-1", league_id="L1", participant_id="u-1", wallet_id="w-1", week=5,
        stake=1000, combined_odds=Decimal("2.5"), type="match_winner", status="open",
    )


@pytest.fixture
def db():
    return MagicMock()


class TestGetOrCreateWallet:
    async def test_insert_writes_grant_entry(self, db) -> None:
        ledger_row = MagicMock(id=1)
        db.execute = AsyncMock(
            side_effect=[_result(_wallet_row(inserted=True)), _result(ledger_row)]
        )

        wallet, created = await WalletRepository().get_or_create_wallet(
            db, "L1", "u-1", "Alpha", 100000
        )

        assert created is True
        assert wallet.balance == 100000
        assert db.execute.call_count == 2
        ledger_params = db.execute.call_args_list[1][0][1]
        assert ledger_params["entry_type"] == "WALLET_GRANT"
        assert ledger_params["amount"] == 100000

    async def test_existing_wallet_no_ledger_entry(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(_wallet_row(balance=4200, inserted=False)))

        wallet, created = await WalletRepository().get_or_create_wallet(
            db, "L1", "u-1", "Alpha", 100000
        )

        assert created is False
        assert wallet.balance == 4200
        assert db.execute.call_count == 1

    async def test_single_upsert_statement(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(_wallet_row()))
        await WalletRepository().get_or_create_wallet(db, "L1", "u-1", "Alpha", 100000)
        sql = str(db.execute.call_args_list[0][0][0])
        assert "ON CONFLICT (league_id, participant_id)" in sql


class TestPlaceWager:
    async def test_debit_insert_and_ledger(self, db) -> None:
        legs = [Leg(type="match_winner", decimal_odds=Decimal("2.5"), matchup_id=1, roster_id=2)]
        db.execute = AsyncMock(
            side_effect=[
                _result(_wallet_row(balance=99000)),
                _result(_wager_row()),
                _result(MagicMock(id=2)),
            ]
        )

        wallet, wager = await WalletRepository().place_wager(
            db, "L1", "u-1", 5, 1000, Decimal("2.5"), "match_winner", legs
        )

        assert wallet.balance == 99000
        assert wager.status == "open"
        assert wager.legs == legs
        debit_sql = str(db.execute.call_args_list[0][0][0])
        assert "balance >= :stake" in debit_sql
        insert_params = db.execute.call_args_list[1][0][1]
        assert json.loads(insert_params["legs"])[0]["roster_id"] == 2
        ledger_params = db.execute.call_args_list[2][0][1]
        assert ledger_params["entry_type"] == "WAGER_STAKE"
        assert ledger_params["amount"] == -1000
        assert ledger_params["balance_after"] == 99000

    async def test_failed_debit_is_insufficient_funds(self, db) -> None:
        db.execute = AsyncMock(
            side_effect=[_result(None), _result(_wallet_row(balance=500))]
        )
        with pytest.raises(InsufficientFundsError):
            await WalletRepository().place_wager(
                db, "L1", "u-1", 5, 1000, Decimal("2.5"), "match_winner", []
            )
        # nothing inserted after the failed debit
        assert db.execute.call_count == 2

    async def test_missing_wallet(self, db) -> None:
        db.execute = AsyncMock(side_effect=[_result(None), _result(None)])
        with pytest.raises(WalletNotFoundError):
            await WalletRepository().place_wager(
                db, "L1", "u-1", 5, 1000, Decimal("2.5"), "match_winner", []
            )


class TestSettleWager:
    async def test_won_credits_wallet_and_writes_payout(self, db) -> None:
        cas_row = MagicMock(id="wg-1", wallet_id="w-1")
        wallet_row = MagicMock(id="w-1", balance=101500)
        db.execute = AsyncMock(
            side_effect=[_result(cas_row), _result(wallet_row), _result(MagicMock(id=3))]
        )

        applied = await WalletRepository().settle_wager(
            db, _wager(), "won", settle_won(1000, Decimal("2.5"))
        )

        assert applied is True
        cas_sql = str(db.execute.call_args_list[0][0][0])
        assert "status = 'open'" in cas_sql
        assert db.execute.call_args_list[0][0][1]["payout"] == 2500
        wallet_params = db.execute.call_args_list[1][0][1]
        assert wallet_params["balance_delta"] == 2500
        assert wallet_params["pnl_delta"] == 1500
        ledger_params = db.execute.call_args_list[2][0][1]
        assert ledger_params["entry_type"] == "WAGER_PAYOUT"
        assert ledger_params["balance_after"] == 101500

    async def test_lost_only_moves_pnl(self, db) -> None:
        cas_row = MagicMock(id="wg-1", wallet_id="w-1")
        db.execute = AsyncMock(
            side_effect=[_result(cas_row), _result(MagicMock(id="w-1", balance=99000))]
        )

        applied = await WalletRepository().settle_wager(db, _wager(), "lost", settle_lost(1000))

        assert applied is True
        assert db.execute.call_count == 2
        wallet_params = db.execute.call_args_list[1][0][1]
        assert wallet_params["balance_delta"] == 0
        assert wallet_params["pnl_delta"] == -1000

    async def test_lost_race_touches_nothing(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(None))

        applied = await WalletRepository().settle_wager(
            db, _wager(), "won", settle_won(1000, Decimal("2.5"))
        )

        assert applied is False
        assert db.execute.call_count == 1


class TestReads:
    async def test_list_open_wagers_decodes_jsonb(self, db) -> None:
        result = MagicMock()
        result.fetchall.return_value = [
            _wager_row(id="a"),
            _wager_row(id="b", legs=[{"type": "team_top_points", "decimal_odds": "3.1", "roster_id": 4}]),
        ]
        db.execute = AsyncMock(return_value=result)

        wagers = await WalletRepository().list_open_wagers(db, "L1")

        assert [w.id for w in wagers] == ["a", "b"]
        assert wagers[0].legs[0].matchup_id == 1
        assert wagers[1].legs[0].decimal_odds == Decimal("3.1")
        assert isinstance(wagers[0].combined_odds, Decimal)

    async def test_get_wallet_none(self, db) -> None:
        db.execute = AsyncMock(return_value=_result(None))
        assert await WalletRepository().get_wallet(db, "L1", "u-x") is None
