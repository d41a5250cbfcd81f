from collections import defaultdict
from typing import Dict, List, Optional, Set

from league_history.analytics.context import AnalyticsContext
from league_history.models.analytics import StrengthOfScheduleEntry
from league_history.models.owner import AggregationKey

# Weight of each SOS index point above or below 100 in adjusted win percentage
SOS_ADJUSTMENT_WEIGHT = 0.5
# Win rate assumed for an opponent with no decided games
NEUTRAL_WIN_RATE = 0.5


def _win_rate(record: Dict[str, int], default: float) -> float:
    decided = record["wins"] + record["losses"]
    if not decided:
        return default
    return record["wins"] / decided


def calculate_strength_of_schedule(
    ctx: AnalyticsContext, season: Optional[int] = None
) -> List[StrengthOfScheduleEntry]:
    """Opponent quality per identity over regular-season games.

    sos_index is the average opponent score relative to the league average
    (100 = average schedule). Ties are left out of win rates.
    """
    games = ctx.games(season)
    if not games:
        return []

    records: Dict[AggregationKey, Dict[str, int]] = defaultdict(lambda: {"wins": 0, "losses": 0})
    opponent_scores: Dict[AggregationKey, List[float]] = defaultdict(list)
    opponent_keys: Dict[AggregationKey, List[AggregationKey]] = defaultdict(list)
    years: Dict[AggregationKey, Set[int]] = defaultdict(set)
    all_scores: List[float] = []

    for m in games:
        home_key = ctx.key(m.year, m.home_team_id, season)
        away_key = ctx.key(m.year, m.away_team_id, season)
        all_scores.extend((m.home_score, m.away_score))

        for key, opp_key, opp_score in (
            (home_key, away_key, m.away_score),
            (away_key, home_key, m.home_score),
        ):
            opponent_scores[key].append(opp_score)
            opponent_keys[key].append(opp_key)
            years[key].add(m.year)

        if m.winner_id is not None:
            winner_key = home_key if m.winner_id == m.home_team_id else away_key
            loser_key = away_key if winner_key is home_key else home_key
            records[winner_key]["wins"] += 1
            records[loser_key]["losses"] += 1
        else:
            # Register both sides so a tie-only identity still has a record
            records[home_key]
            records[away_key]

    league_avg = sum(all_scores) / len(all_scores)

    entries = []
    for key, scores in opponent_scores.items():
        avg_opp_score = sum(scores) / len(scores)
        opp_rates = [_win_rate(records[k], NEUTRAL_WIN_RATE) for k in opponent_keys[key]]
        avg_opp_win_rate = sum(opp_rates) / len(opp_rates)
        sos_index = (avg_opp_score / league_avg) * 100 if league_avg else 100.0
        own_win_pct = _win_rate(records[key], 0.0) * 100

        entries.append(
            StrengthOfScheduleEntry(
                key=key,
                display_name=ctx.display_name(key, season),
                avg_opponent_score=avg_opp_score,
                avg_opponent_win_pct=avg_opp_win_rate * 100,
                sos_index=sos_index,
                league_avg_score=league_avg,
                games_played=len(scores),
                team_win_pct=own_win_pct,
                adjusted_win_pct=own_win_pct + (sos_index - 100) * SOS_ADJUSTMENT_WEIGHT,
                seasons_played=len(years[key]),
            )
        )

    # Hardest schedule first
    return ctx.publish(entries, season, lambda e: e.sos_index, descending=True)
