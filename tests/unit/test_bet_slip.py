"""Tests for lw_slip.domain.models: legs and slip aggregation."""

from decimal import Decimal

import pytest

from src.lw_common.enums import PARLAY, LegType
from src.lw_slip.domain.models import BetSlip, Leg


class TestLegSerialization:
    def test_round_trip_keeps_decimal_odds(self) -> None:
        leg = Leg(type="match_winner", decimal_odds=Decimal("1.91"), matchup_id=3, roster_id=7)
        restored = Leg.from_dict(leg.to_dict())
        assert restored == leg
        assert isinstance(restored.decimal_odds, Decimal)

    def test_unknown_type_survives(self) -> None:
        leg = Leg.from_dict({"type": "longest_td", "decimal_odds": "5.5"})
        assert leg.type == "longest_td"
        assert leg.decimal_odds == Decimal("5.5")


class TestAggregation:
    def test_empty_slip(self) -> None:
        slip = BetSlip()
        assert slip.is_empty
        assert slip.combined_odds == Decimal("1")
        assert slip.slip_type is None
        assert slip.potential_return(1000) == 0

    def test_single_leg_takes_leg_type(self) -> None:
        slip = BetSlip()
        slip.add_team_top(4, Decimal("3.50"))
        assert slip.slip_type == LegType.TEAM_TOP_POINTS
        assert slip.combined_odds == Decimal("3.50")

    def test_multiple_legs_is_parlay(self) -> None:
        slip = BetSlip()
        slip.add_match_winner(1, 2, Decimal("2.00"))
        slip.add_player_top("4046", Decimal("1.50"))
        assert slip.slip_type == PARLAY
        assert slip.combined_odds == Decimal("3.0000")

    def test_potential_return_rounds_down(self) -> None:
        slip = BetSlip()
        slip.add_match_winner(1, 2, Decimal("1.91"))
        slip.add_match_winner(2, 5, Decimal("1.91"))
        # 1000 * 3.6481 = 3648.1
        assert slip.potential_return(1000) == 3648


class TestMatchWinner:
    def test_same_side_twice_is_noop(self) -> None:
        slip = BetSlip()
        assert slip.add_match_winner(1, 2, Decimal("1.80"))
        assert not slip.add_match_winner(1, 2, Decimal("1.80"))
        assert len(slip) == 1

    def test_other_side_replaces(self) -> None:
        slip = BetSlip()
        slip.add_match_winner(1, 2, Decimal("1.80"))
        slip.add_team_top(9, Decimal("6.00"))
        assert slip.add_match_winner(1, 3, Decimal("2.10"))

        assert len(slip) == 2
        match_legs = [leg for leg in slip.legs if leg.type == LegType.MATCH_WINNER]
        assert len(match_legs) == 1
        assert match_legs[0].roster_id == 3
        # the replacement goes to the end
        assert slip.legs[-1].roster_id == 3

    def test_different_matchups_coexist(self) -> None:
        slip = BetSlip()
        slip.add_match_winner(1, 2, Decimal("1.80"))
        slip.add_match_winner(2, 4, Decimal("1.80"))
        assert len(slip) == 2


class TestTopMarkets:
    def test_duplicate_team_is_noop(self) -> None:
        slip = BetSlip()
        assert slip.add_team_top(4, Decimal("3.00"))
        assert not slip.add_team_top(4, Decimal("3.00"))
        assert len(slip) == 1

    def test_duplicate_player_is_noop(self) -> None:
        slip = BetSlip()
        assert slip.add_player_top("4046", Decimal("4.00"))
        assert not slip.add_player_top("4046", Decimal("4.00"))
        assert len(slip) == 1

    def test_team_and_match_winner_on_same_roster(self) -> None:
        slip = BetSlip()
        slip.add_team_top(4, Decimal("3.00"))
        slip.add_match_winner(2, 4, Decimal("1.50"))
        assert len(slip) == 2


class TestRemoveAndClear:
    def test_remove_by_index(self) -> None:
        slip = BetSlip()
        slip.add_team_top(1, Decimal("3.00"))
        slip.add_team_top(2, Decimal("4.00"))
        removed = slip.remove(0)
        assert removed.roster_id == 1
        assert [leg.roster_id for leg in slip.legs] == [2]

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_remove_out_of_range(self, index: int) -> None:
        slip = BetSlip()
        slip.add_team_top(1, Decimal("3.00"))
        with pytest.raises(IndexError):
            slip.remove(index)
        assert len(slip) == 1

    def test_clear(self) -> None:
        slip = BetSlip(week=5)
        slip.add_team_top(1, Decimal("3.00"))
        slip.clear()
        assert slip.is_empty
        assert slip.week is None

    def test_list_round_trip(self) -> None:
        slip = BetSlip()
        slip.add_match_winner(1, 2, Decimal("1.80"), "A | Win")
        slip.add_player_top("4046", Decimal("4.00"), "P | Top Scorer")
        assert BetSlip.from_list(slip.to_list()).legs == slip.legs
