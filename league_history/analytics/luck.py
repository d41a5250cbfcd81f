"""Luck: actual wins against all-play expected wins.

For each regular-season week every team is compared with every other team
that played that week. Outscoring k of n - 1 opponents is worth k / (n - 1)
expected wins. When every team plays each week and no game is tied, league
expected wins equal league actual wins, so luck (actual - expected) sums to 0.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Set, Tuple

from loguru import logger

from league_history.analytics.context import AnalyticsContext
from league_history.models.analytics import LuckEntry, SeasonLuck
from league_history.models.owner import AggregationKey
from league_history.utils.misc_utils import safe_pct


def all_play_week(scores: Dict[int, float]) -> Dict[int, Tuple[int, int, int]]:
    """(opponents outscored, opponents tied, opponents) for each team in one week."""
    opponents = len(scores) - 1
    results = {}
    for team_id, score in scores.items():
        beaten = sum(1 for other, s in scores.items() if other != team_id and score > s)
        tied = sum(1 for other, s in scores.items() if other != team_id and score == s)
        results[team_id] = (beaten, tied, opponents)
    return results


class _LuckTally:
    def __init__(self):
        self.expected_wins = 0.0
        self.actual_wins = 0
        self.all_play_wins = 0
        self.all_play_losses = 0
        self.all_play_ties = 0
        self.weeks = 0
        self.years: Set[int] = set()


def calculate_luck(ctx: AnalyticsContext, season: Optional[int] = None) -> List[LuckEntry]:
    tallies: Dict[AggregationKey, _LuckTally] = defaultdict(_LuckTally)
    games = ctx.games(season)

    weekly_scores: Dict[tuple, Dict[int, float]] = defaultdict(dict)
    for m in games:
        weekly_scores[(m.year, m.week)][m.home_team_id] = m.home_score
        weekly_scores[(m.year, m.week)][m.away_team_id] = m.away_score

    for (year, week), scores in sorted(weekly_scores.items()):
        if len(scores) < 2:
            continue
        for team_id, (beaten, tied, opponents) in all_play_week(scores).items():
            tally = tallies[ctx.key(year, team_id, season)]
            tally.expected_wins += beaten / opponents
            tally.all_play_wins += beaten
            tally.all_play_ties += tied
            tally.all_play_losses += opponents - beaten - tied
            tally.weeks += 1
            tally.years.add(year)

    for m in games:
        if m.winner_id is None:
            continue
        key = ctx.key(m.year, m.winner_id, season)
        if key in tallies:
            tallies[key].actual_wins += 1

    entries = []
    for key, tally in tallies.items():
        luck = tally.actual_wins - tally.expected_wins
        all_play_games = tally.all_play_wins + tally.all_play_losses + tally.all_play_ties
        entries.append(
            LuckEntry(
                key=key,
                display_name=ctx.display_name(key, season),
                actual_wins=tally.actual_wins,
                expected_wins=tally.expected_wins,
                luck_score=luck,
                luck_per_season=luck / len(tally.years),
                all_play_wins=tally.all_play_wins,
                all_play_losses=tally.all_play_losses,
                all_play_ties=tally.all_play_ties,
                all_play_win_pct=safe_pct(tally.all_play_wins, all_play_games),
                weeks_played=tally.weeks,
                seasons_played=len(tally.years),
            )
        )

    # Most unlucky first
    return ctx.publish(entries, season, lambda e: e.luck_score)


def season_luck_breakdown(ctx: AnalyticsContext) -> List[SeasonLuck]:
    breakdown = []
    for year in ctx.ledger.years():
        year_luck = calculate_luck(ctx, year)
        if not year_luck:
            logger.debug(f"No regular-season games for luck in {year}")
        luckiest = max(year_luck, key=lambda e: e.luck_score) if year_luck else None
        breakdown.append(
            SeasonLuck(
                year=year,
                luckiest=luckiest,
                unluckiest=year_luck[0] if year_luck else None,
                all_teams=year_luck,
            )
        )
    return breakdown
