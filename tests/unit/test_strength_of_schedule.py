"""
Unit Tests for Strength of Schedule
===================================
Tests for opponent scoring, opponent win rates and adjusted win percentage.
"""

import pytest

from conftest import DAN
from league_history.analytics.context import AnalyticsContext
from league_history.analytics.strength_of_schedule import calculate_strength_of_schedule
from league_history.identity.resolver import OwnerIdentityResolver
from league_history.models.owner import AggregationKey
from league_history.normalization.normalizer import SeasonNormalizer


def _context(payloads):
    ledger = SeasonNormalizer().normalize(payloads)
    return AnalyticsContext(ledger, OwnerIdentityResolver(ledger))


class TestStrengthOfSchedule:
    """Test SOS on small hand-checked leagues."""

    def test_two_team_league(self, make_team, make_game, make_payload):
        """Test index, opponent win rate and adjustment for a three-game series."""
        ctx = _context(
            {
                2024: make_payload(
                    [make_team(1), make_team(2)],
                    [
                        make_game(1, 1, 100, 2, 80),
                        make_game(2, 1, 110, 2, 90),
                        make_game(3, 1, 90, 2, 100),
                    ],
                )
            }
        )
        team2, team1 = calculate_strength_of_schedule(ctx, 2024)

        assert team1.key == AggregationKey.team(1)
        assert team1.league_avg_score == pytest.approx(95.0)
        assert team1.avg_opponent_score == pytest.approx(90.0)
        assert team1.sos_index == pytest.approx(90 / 95 * 100)
        assert team1.avg_opponent_win_pct == pytest.approx(100 / 3)
        assert team1.team_win_pct == pytest.approx(200 / 3)
        assert team1.adjusted_win_pct == pytest.approx(200 / 3 + (90 / 95 * 100 - 100) * 0.5)
        assert team1.games_played == 3

        assert team2.sos_index == pytest.approx(100 / 95 * 100)
        assert team2.avg_opponent_win_pct == pytest.approx(200 / 3)

    def test_winless_opponent_counts_as_even(self, make_team, make_game, make_payload):
        """Test an opponent with only ties has a neutral win rate."""
        ctx = _context(
            {
                2024: make_payload(
                    [make_team(1), make_team(2)],
                    [make_game(1, 1, 100, 2, 100), make_game(2, 2, 90, 1, 90)],
                )
            }
        )
        entries = calculate_strength_of_schedule(ctx, 2024)
        for entry in entries:
            assert entry.avg_opponent_win_pct == pytest.approx(50.0)
            assert entry.team_win_pct == 0.0
            assert entry.sos_index == pytest.approx(100.0)
            assert entry.adjusted_win_pct == pytest.approx(0.0)

    def test_no_games(self, make_team, make_payload):
        """Test a season without games yields an empty board."""
        ctx = _context({2024: make_payload([make_team(1), make_team(2)])})
        assert calculate_strength_of_schedule(ctx) == []

    def test_playoffs_excluded(self, analytics_ctx):
        """Test only regular-season games are counted."""
        entries = calculate_strength_of_schedule(analytics_ctx, 2022)
        assert all(e.games_played == 3 for e in entries)

    def test_all_time_order_and_filter(self, analytics_ctx):
        """Test hardest schedule first and former owners left out."""
        entries = calculate_strength_of_schedule(analytics_ctx)
        assert len(entries) == 4
        assert AggregationKey.owner(DAN) not in [e.key for e in entries]
        indexes = [e.sos_index for e in entries]
        assert indexes == sorted(indexes, reverse=True)
        assert all(e.league_avg_score == entries[0].league_avg_score for e in entries)
