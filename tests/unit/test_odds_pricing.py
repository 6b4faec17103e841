"""Tests for lw_odds.domain.pricing: pure odds functions."""

import pytest

from src.lw_odds.domain.models import PlayerProjection, TeamProjection
from src.lw_odds.domain.pricing import (
    clamp,
    matchup_odds,
    matchup_win_probability,
    normalize_with_margin,
    player_rating,
    player_top_score_odds,
    team_top_score_odds,
    to_decimal_odds,
)


class TestHelpers:
    def test_to_decimal_odds_rounds_to_cents(self) -> None:
        assert to_decimal_odds(0.5) == 2.0
        assert to_decimal_odds(0.35) == 2.86
        assert to_decimal_odds(0.9) == 1.11

    def test_clamp(self) -> None:
        assert clamp(0.95, 0.1, 0.9) == 0.9
        assert clamp(0.01, 0.1, 0.9) == 0.1
        assert clamp(0.4, 0.1, 0.9) == 0.4

    def test_normalize_sums_to_one(self) -> None:
        probs = normalize_with_margin([10.0, 30.0, 60.0], 0.08)
        assert sum(probs) == pytest.approx(1.0)
        assert probs == pytest.approx([0.1, 0.3, 0.6])

    def test_normalize_all_zero(self) -> None:
        assert normalize_with_margin([0.0, 0.0], 0.08) == [0.0, 0.0]


class TestMatchupOdds:
    def test_no_projections_is_even(self) -> None:
        odds = matchup_odds(None, None)
        assert (odds.odds_a, odds.odds_b) == (2.0, 2.0)

    def test_zero_projections_is_even(self) -> None:
        odds = matchup_odds(0.0, 0.0)
        assert (odds.odds_a, odds.odds_b) == (2.0, 2.0)

    def test_equal_projections_is_even(self) -> None:
        odds = matchup_odds(110.0, 110.0)
        assert (odds.odds_a, odds.odds_b) == (2.0, 2.0)

    def test_favourite_gets_shorter_odds(self) -> None:
        odds = matchup_odds(125.0, 100.0)
        assert odds.odds_a < 2.0 < odds.odds_b

    def test_symmetry(self) -> None:
        forward = matchup_odds(125.0, 100.0)
        reverse = matchup_odds(100.0, 125.0)
        assert forward.odds_a == reverse.odds_b
        assert forward.odds_b == reverse.odds_a

    def test_lopsided_matchup_is_clamped(self) -> None:
        odds = matchup_odds(200.0, 10.0)
        assert odds.odds_a == 1.11
        assert odds.odds_b == 10.0

    def test_one_side_missing_projection(self) -> None:
        odds = matchup_odds(90.0, None)
        assert odds.odds_a < odds.odds_b

    def test_win_probability_is_logistic(self) -> None:
        assert matchup_win_probability(100.0, 100.0) == pytest.approx(0.5)
        assert matchup_win_probability(118.0, 100.0) > 0.7


class TestTeamTopScoreOdds:
    def test_empty_field(self) -> None:
        assert team_top_score_odds([]) == {}

    def test_equal_field(self) -> None:
        teams = [TeamProjection(roster_id=i, projected_points=100.0) for i in range(1, 5)]
        assert team_top_score_odds(teams) == {1: 4.0, 2: 4.0, 3: 4.0, 4: 4.0}

    def test_probability_capped(self) -> None:
        teams = [
            TeamProjection(roster_id=1, projected_points=300.0),
            TeamProjection(roster_id=2, projected_points=100.0),
        ]
        odds = team_top_score_odds(teams)
        assert odds[1] == 2.0
        assert odds[2] == 4.0

    def test_single_team_is_capped_at_evens(self) -> None:
        odds = team_top_score_odds([TeamProjection(roster_id=7, projected_points=112.4)])
        assert odds == {7: 2.0}

    def test_zero_projection_not_offered(self) -> None:
        teams = [
            TeamProjection(roster_id=1, projected_points=100.0),
            TeamProjection(roster_id=2, projected_points=0.0),
            TeamProjection(roster_id=3, projected_points=None),
        ]
        odds = team_top_score_odds(teams)
        assert set(odds) == {1}

    def test_all_zero_offers_nothing(self) -> None:
        teams = [TeamProjection(roster_id=i, projected_points=0.0) for i in range(1, 4)]
        assert team_top_score_odds(teams) == {}

    def test_stronger_team_shorter_odds(self) -> None:
        teams = [
            TeamProjection(roster_id=1, projected_points=130.0),
            TeamProjection(roster_id=2, projected_points=110.0),
            TeamProjection(roster_id=3, projected_points=90.0),
            TeamProjection(roster_id=4, projected_points=70.0),
        ]
        odds = team_top_score_odds(teams)
        assert odds[1] < odds[2] < odds[3] < odds[4]


class TestPlayerRating:
    def test_blend(self) -> None:
        p = PlayerProjection(player_id="1", projected_points=20.0, historical_average=10.0)
        assert player_rating(p) == pytest.approx(16.0)

    def test_no_history_uses_projection(self) -> None:
        p = PlayerProjection(player_id="1", projected_points=20.0)
        assert player_rating(p) == pytest.approx(20.0)

    def test_floored_at_zero(self) -> None:
        p = PlayerProjection(player_id="1", projected_points=-4.0, historical_average=-2.0)
        assert player_rating(p) == 0.0


class TestPlayerTopScoreOdds:
    def test_empty_field(self) -> None:
        assert player_top_score_odds([]) == {}

    def test_three_way_field(self) -> None:
        players = [PlayerProjection(player_id=str(i), projected_points=20.0) for i in range(3)]
        assert player_top_score_odds(players) == {"0": 3.0, "1": 3.0, "2": 3.0}

    def test_two_way_field_is_capped(self) -> None:
        players = [PlayerProjection(player_id=str(i), projected_points=20.0) for i in range(2)]
        assert player_top_score_odds(players) == {"0": 2.86, "1": 2.86}

    def test_history_moves_price(self) -> None:
        players = [
            PlayerProjection(player_id="hot", projected_points=18.0, historical_average=30.0),
            PlayerProjection(player_id="cold", projected_points=18.0, historical_average=5.0),
            PlayerProjection(player_id="flat", projected_points=18.0),
            PlayerProjection(player_id="other", projected_points=18.0),
        ]
        odds = player_top_score_odds(players)
        assert odds["hot"] < odds["flat"] < odds["cold"]


FIELD_SHAPES = [
    [100.0],
    [100.0, 100.0],
    [150.0, 0.1],
    [300.0, 1.0, 1.0, 1.0],
    [88.0, 101.5, 93.2, 120.7, 76.4, 110.0, 99.9, 104.3, 91.1, 115.8],
    [-20.0, 5.0, 40.0],
    [1e-6, 1e6],
]


class TestMinimumOdds:
    @pytest.mark.parametrize(
        ("proj_a", "proj_b"),
        [
            (None, None),
            (0.0, 0.0),
            (120.0, None),
            (None, 95.0),
            (100.0, 100.0),
            (180.0, 60.0),
            (500.0, 0.0),
            (-30.0, 250.0),
            (1e6, 1e-6),
        ],
    )
    def test_matchup_prices(self, proj_a, proj_b) -> None:
        odds = matchup_odds(proj_a, proj_b)
        assert odds.odds_a >= 1.11
        assert odds.odds_b >= 1.11

    @pytest.mark.parametrize("points", FIELD_SHAPES)
    def test_team_prices(self, points) -> None:
        teams = [TeamProjection(roster_id=i, projected_points=p) for i, p in enumerate(points)]
        odds = team_top_score_odds(teams)
        assert odds
        assert all(price >= 2.0 for price in odds.values())

    @pytest.mark.parametrize("points", FIELD_SHAPES)
    def test_player_prices(self, points) -> None:
        players = [
            PlayerProjection(player_id=str(i), projected_points=p, historical_average=p * 1.5)
            for i, p in enumerate(points)
        ]
        odds = player_top_score_odds(players)
        assert odds
        assert all(price >= 2.86 for price in odds.values())
