import math
from collections import defaultdict
from typing import Dict, List, Optional, Set

from league_history.analytics.context import AnalyticsContext
from league_history.models.analytics import ConsistencyEntry
from league_history.models.owner import AggregationKey
from league_history.utils.misc_utils import index_percentile, safe_pct

BOOM_FACTOR = 1.2
BUST_FACTOR = 0.8


def consistency_entry(
    key: AggregationKey, display_name: str, scores: List[float], seasons_played: int
) -> ConsistencyEntry:
    n = len(scores)
    ordered = sorted(scores)
    mean = sum(scores) / n
    std_dev = math.sqrt(sum((s - mean) ** 2 for s in scores) / n)
    floor = index_percentile(ordered, 0.1)
    ceiling = index_percentile(ordered, 0.9)
    booms = sum(1 for s in scores if s >= mean * BOOM_FACTOR)
    busts = sum(1 for s in scores if s <= mean * BUST_FACTOR)

    return ConsistencyEntry(
        key=key,
        display_name=display_name,
        games_played=n,
        avg_score=mean,
        std_dev=std_dev,
        coefficient_of_variation=safe_pct(std_dev, mean),
        floor=floor,
        ceiling=ceiling,
        range=ceiling - floor,
        boom_games=booms,
        bust_games=busts,
        boom_rate=safe_pct(booms, n),
        bust_rate=safe_pct(busts, n),
        high_score=ordered[-1],
        low_score=ordered[0],
        seasons_played=seasons_played,
    )


def calculate_consistency(
    ctx: AnalyticsContext, season: Optional[int] = None, min_games: int = 3
) -> List[ConsistencyEntry]:
    """Scoring volatility per identity over every game, playoffs included.

    Identities with fewer than ``min_games`` scores are left out.
    """
    scores: Dict[AggregationKey, List[float]] = defaultdict(list)
    years: Dict[AggregationKey, Set[int]] = defaultdict(set)

    for m in ctx.games(season, include_playoffs=True):
        for team_id in (m.home_team_id, m.away_team_id):
            key = ctx.key(m.year, team_id, season)
            scores[key].append(m.score_for(team_id))
            years[key].add(m.year)

    entries = [
        consistency_entry(key, ctx.display_name(key, season), key_scores, len(years[key]))
        for key, key_scores in scores.items()
        if len(key_scores) >= min_games
    ]
    # Lowest coefficient of variation first
    return ctx.publish(entries, season, lambda e: e.coefficient_of_variation)
