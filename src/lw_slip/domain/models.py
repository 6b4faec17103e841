"""Bet slip domain — legs and the ordered, mutable slip that combines them.

Pure: no Redis, no database. The slip is per-session state handed in by the
application layer; nothing here is process-wide.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from src.lw_common.enums import PARLAY, LegType
from src.lw_common.money import multiply_odds, payout_cents, to_odds


@dataclass(frozen=True)
class Leg:
    """One market selection with the odds captured when it was added.

    ``type`` is kept as a plain string so that legs of a type this build does
    not know survive a round trip through storage untouched.
    """

    type: str
    decimal_odds: Decimal
    matchup_id: int | None = None
    roster_id: int | None = None
    player_id: str | None = None
    label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "decimal_odds": str(self.decimal_odds),
            "matchup_id": self.matchup_id,
            "roster_id": self.roster_id,
            "player_id": self.player_id,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Leg":
        return cls(
            type=str(raw.get("type", "")),
            decimal_odds=to_odds(raw.get("decimal_odds", "1")),
            matchup_id=raw.get("matchup_id"),
            roster_id=raw.get("roster_id"),
            player_id=raw.get("player_id"),
            label=raw.get("label"),
        )


@dataclass
class BetSlip:
    """Legs in the order they were added.

    ``week`` is the league week of the odds board the legs were priced from;
    it is None until the first leg goes on.
    """

    legs: list[Leg] = field(default_factory=list)
    week: int | None = None

    def __len__(self) -> int:
        return len(self.legs)

    @property
    def is_empty(self) -> bool:
        return not self.legs

    @property
    def combined_odds(self) -> Decimal:
        return multiply_odds(leg.decimal_odds for leg in self.legs)

    @property
    def slip_type(self) -> str | None:
        if not self.legs:
            return None
        if len(self.legs) == 1:
            return self.legs[0].type
        return PARLAY

    def potential_return(self, stake: int) -> int:
        return payout_cents(stake, self.combined_odds) if self.legs else 0

    def add_match_winner(
        self,
        matchup_id: int,
        roster_id: int,
        odds: Decimal,
        label: str | None = None,
    ) -> bool:
        """Back one side of a matchup. Returns False when nothing changed.

        Backing the other side of a matchup already on the slip replaces that
        leg: a matchup can only be backed one way.
        """
        for i, leg in enumerate(self.legs):
            if leg.type != LegType.MATCH_WINNER or leg.matchup_id != matchup_id:
                continue
            if leg.roster_id == roster_id:
                return False
            del self.legs[i]
            break
        self.legs.append(
            Leg(
                type=LegType.MATCH_WINNER.value,
                decimal_odds=odds,
                matchup_id=matchup_id,
                roster_id=roster_id,
                label=label,
            )
        )
        return True

    def add_team_top(self, roster_id: int, odds: Decimal, label: str | None = None) -> bool:
        if any(
            leg.type == LegType.TEAM_TOP_POINTS and leg.roster_id == roster_id
            for leg in self.legs
        ):
            return False
        self.legs.append(
            Leg(
                type=LegType.TEAM_TOP_POINTS.value,
                decimal_odds=odds,
                roster_id=roster_id,
                label=label,
            )
        )
        return True

    def add_player_top(self, player_id: str, odds: Decimal, label: str | None = None) -> bool:
        if any(
            leg.type == LegType.PLAYER_TOP_POINTS and leg.player_id == player_id
            for leg in self.legs
        ):
            return False
        self.legs.append(
            Leg(
                type=LegType.PLAYER_TOP_POINTS.value,
                decimal_odds=odds,
                player_id=player_id,
                label=label,
            )
        )
        return True

    def remove(self, index: int) -> Leg:
        """Remove and return the leg at ``index``; IndexError if out of range."""
        if not 0 <= index < len(self.legs):
            raise IndexError(index)
        return self.legs.pop(index)

    def clear(self) -> None:
        self.legs.clear()
        self.week = None

    def to_list(self) -> list[dict[str, Any]]:
        return [leg.to_dict() for leg in self.legs]

    @classmethod
    def from_list(cls, raw: list[dict[str, Any]], week: int | None = None) -> "BetSlip":
        return cls(legs=[Leg.from_dict(item) for item in raw], week=week)
