"""Balance and P&L rules for the wager lifecycle.

Stake leaves the balance when the wager is placed, so settlement only ever
credits the balance (on a win) and realizes P&L:

    placement:  balance -= stake
    won:        balance += payout;  pnl += payout - stake
    lost:       balance unchanged;  pnl -= stake

where payout = floor(stake * combined_odds).
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from src.lw_common.errors import EmptySlipError, InsufficientFundsError, InvalidStakeError
from src.lw_common.money import payout_cents


@dataclass(frozen=True)
class SettlementDelta:
    balance: int
    pnl: int
    payout: int


def validate_placement(balance: int, stake: int, legs: Sequence[object]) -> None:
    """Raise the first placement error that applies, in user-facing order."""
    if not legs:
        raise EmptySlipError()
    if stake <= 0:
        raise InvalidStakeError(stake)
    if stake > balance:
        raise InsufficientFundsError(stake, balance)


def settle_won(stake: int, combined_odds: Decimal) -> SettlementDelta:
    payout = payout_cents(stake, combined_odds)
    return SettlementDelta(balance=payout, pnl=payout - stake, payout=payout)


def settle_lost(stake: int) -> SettlementDelta:
    return SettlementDelta(balance=0, pnl=-stake, payout=0)
