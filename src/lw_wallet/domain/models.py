"""Domain models for lw_wallet — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from src.lw_slip.domain.models import Leg


@dataclass
class Wallet:
    id: str
    league_id: str
    participant_id: str
    display_name: str
    balance: int             # cents
    starting_bankroll: int   # cents, never changes
    pnl: int                 # cents, realized at settlement only
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Wager:
    id: str
    league_id: str
    participant_id: str
    wallet_id: str
    week: int
    stake: int               # cents, debited at placement
    combined_odds: Decimal
    type: str                # LegType value or "parlay"
    status: str              # WagerStatus value
    legs: list[Leg] = field(default_factory=list)
    payout: int | None = None
    created_at: datetime | None = None
    settled_at: datetime | None = None


@dataclass
class LedgerEntry:
    id: int                          # BIGSERIAL
    wallet_id: str
    entry_type: str                  # LedgerEntryType value
    amount: int                      # cents, positive=credit negative=debit
    balance_after: int               # cents
    wager_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None
