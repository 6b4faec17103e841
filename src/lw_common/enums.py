"""Global enums — values must match DB CHECK constraints exactly."""

from enum import Enum


class LegType(str, Enum):
    MATCH_WINNER = "match_winner"
    TEAM_TOP_POINTS = "team_top_points"
    PLAYER_TOP_POINTS = "player_top_points"


# A slip with more than one leg is stored with this type
PARLAY = "parlay"


class WagerStatus(str, Enum):
    OPEN = "open"
    WON = "won"
    LOST = "lost"


class LedgerEntryType(str, Enum):
    WALLET_GRANT = "WALLET_GRANT"
    WAGER_STAKE = "WAGER_STAKE"
    WAGER_PAYOUT = "WAGER_PAYOUT"
