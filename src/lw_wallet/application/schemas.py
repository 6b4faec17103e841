"""Pydantic schemas and cursor utilities for lw_wallet API."""

import base64
import json

from pydantic import BaseModel, Field

from src.lw_common.datetime_utils import isoformat_or_none
from src.lw_common.money import cents_to_display
from src.lw_wallet.domain.models import LedgerEntry, Wager, Wallet

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SessionRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)


class PlaceWagerRequest(BaseModel):
    stake_cents: int = Field(..., description="Stake in cents, debited on placement")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class WalletResponse(BaseModel):
    participant_id: str
    display_name: str
    balance_cents: int
    balance_display: str
    starting_bankroll_cents: int
    pnl_cents: int
    pnl_display: str

    @classmethod
    def from_wallet(cls, wallet: Wallet) -> "WalletResponse":
        return cls(
            participant_id=wallet.participant_id,
            display_name=wallet.display_name,
            balance_cents=wallet.balance,
            balance_display=cents_to_display(wallet.balance),
            starting_bankroll_cents=wallet.starting_bankroll,
            pnl_cents=wallet.pnl,
            pnl_display=cents_to_display(wallet.pnl),
        )


class SessionResponse(BaseModel):
    wallet: WalletResponse
    created: bool


class WagerLegItem(BaseModel):
    type: str
    decimal_odds: str
    label: str | None = None
    matchup_id: int | None = None
    roster_id: int | None = None
    player_id: str | None = None


class WagerItem(BaseModel):
    id: str
    participant_id: str
    week: int
    type: str
    status: str
    stake_cents: int
    stake_display: str
    combined_odds: str
    payout_cents: int | None = None
    legs: list[WagerLegItem]
    created_at: str | None = None
    settled_at: str | None = None

    @classmethod
    def from_wager(cls, wager: Wager) -> "WagerItem":
        return cls(
            id=wager.id,
            participant_id=wager.participant_id,
            week=wager.week,
            type=wager.type,
            status=wager.status,
            stake_cents=wager.stake,
            stake_display=cents_to_display(wager.stake),
            combined_odds=f"{wager.combined_odds:.2f}",
            payout_cents=wager.payout,
            legs=[
                WagerLegItem(
                    type=leg.type,
                    decimal_odds=f"{leg.decimal_odds:.2f}",
                    label=leg.label,
                    matchup_id=leg.matchup_id,
                    roster_id=leg.roster_id,
                    player_id=leg.player_id,
                )
                for leg in wager.legs
            ],
            created_at=isoformat_or_none(wager.created_at),
            settled_at=isoformat_or_none(wager.settled_at),
        )


class PlaceWagerResponse(BaseModel):
    wager: WagerItem
    balance_cents: int
    balance_display: str


class WagerListResponse(BaseModel):
    items: list[WagerItem]


class RecentWagersResponse(BaseModel):
    settled: list[WagerItem]
    open: list[WagerItem]


class LedgerEntryItem(BaseModel):
    id: int
    entry_type: str
    amount_cents: int
    amount_display: str
    balance_after_cents: int
    balance_after_display: str
    wager_id: str | None
    description: str | None
    created_at: str

    @classmethod
    def from_entry(cls, e: LedgerEntry) -> "LedgerEntryItem":
        return cls(
            id=e.id,
            entry_type=e.entry_type,
            amount_cents=e.amount,
            amount_display=cents_to_display(e.amount),
            balance_after_cents=e.balance_after,
            balance_after_display=cents_to_display(e.balance_after),
            wager_id=e.wager_id,
            description=e.description,
            created_at=e.created_at.isoformat() if e.created_at else "",
        )


class LedgerResponse(BaseModel):
    items: list[LedgerEntryItem]
    next_cursor: str | None
    has_more: bool


class LeaderboardItem(BaseModel):
    rank: int
    participant_id: str
    display_name: str
    balance_cents: int
    balance_display: str
    pnl_cents: int
    pnl_display: str


class LeaderboardResponse(BaseModel):
    items: list[LeaderboardItem]
