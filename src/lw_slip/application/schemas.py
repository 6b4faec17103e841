"""Pydantic schemas for the lw_slip API."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from src.lw_common.money import cents_to_display
from src.lw_slip.domain.models import BetSlip

# ---------------------------------------------------------------------------
# Request schemas: one per market, discriminated on "type"
# ---------------------------------------------------------------------------


class AddMatchWinnerLeg(BaseModel):
    type: Literal["match_winner"]
    matchup_id: int
    roster_id: int


class AddTeamTopLeg(BaseModel):
    type: Literal["team_top_points"]
    roster_id: int


class AddPlayerTopLeg(BaseModel):
    type: Literal["player_top_points"]
    player_id: str = Field(..., min_length=1)


AddLegRequest = Annotated[
    AddMatchWinnerLeg | AddTeamTopLeg | AddPlayerTopLeg,
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class SlipLegItem(BaseModel):
    index: int
    type: str
    decimal_odds: str
    matchup_id: int | None
    roster_id: int | None
    player_id: str | None
    label: str | None


class SlipResponse(BaseModel):
    participant_id: str
    week: int | None = None
    legs: list[SlipLegItem]
    slip_type: str | None
    combined_odds: str
    potential_return_cents: int | None = None
    potential_return_display: str | None = None

    @classmethod
    def from_slip(
        cls, participant_id: str, slip: BetSlip, stake_cents: int | None = None
    ) -> "SlipResponse":
        potential = slip.potential_return(stake_cents) if stake_cents else None
        return cls(
            participant_id=participant_id,
            week=slip.week,
            legs=[
                SlipLegItem(
                    index=i,
                    type=leg.type,
                    decimal_odds=str(leg.decimal_odds),
                    matchup_id=leg.matchup_id,
                    roster_id=leg.roster_id,
                    player_id=leg.player_id,
                    label=leg.label,
                )
                for i, leg in enumerate(slip.legs)
            ],
            slip_type=slip.slip_type,
            combined_odds=str(slip.combined_odds),
            potential_return_cents=potential,
            potential_return_display=cents_to_display(potential) if potential is not None else None,
        )
