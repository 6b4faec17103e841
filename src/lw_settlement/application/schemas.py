"""Pydantic schemas for lw_settlement."""

from pydantic import BaseModel, Field


class SettlementReport(BaseModel):
    """Summary of one settlement pass."""

    current_week: int | None = None
    considered: int = 0
    won: int = 0
    lost: int = 0
    deferred: int = 0
    lost_races: int = 0
    skipped_weeks: list[int] = Field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def settled(self) -> int:
        return self.won + self.lost
