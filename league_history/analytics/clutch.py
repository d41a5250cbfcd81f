from collections import defaultdict
from typing import Dict, List, Optional, Set

from league_history.analytics.context import AnalyticsContext
from league_history.models.analytics import ClutchEntry
from league_history.models.owner import AggregationKey
from league_history.utils.misc_utils import safe_pct


class _ClutchTally:
    def __init__(self):
        self.close_wins = 0
        self.close_losses = 0
        self.close_ties = 0
        self.blowout_wins = 0
        self.blowout_losses = 0
        self.ties = 0
        self.win_margins: List[float] = []
        self.loss_margins: List[float] = []
        self.years: Set[int] = set()


def is_close(margin: float, close_threshold: float) -> bool:
    return margin <= close_threshold


def is_blowout(margin: float, blowout_threshold: float) -> bool:
    return margin > blowout_threshold


def calculate_clutch(
    ctx: AnalyticsContext,
    season: Optional[int] = None,
    close_threshold: float = 5.0,
    blowout_threshold: float = 30.0,
) -> List[ClutchEntry]:
    """Close-game and blowout performance over regular-season games.

    A tie is a third outcome: it counts toward close games played but never
    as a close win or loss, and never toward a blowout.
    """
    tallies: Dict[AggregationKey, _ClutchTally] = defaultdict(_ClutchTally)

    for m in ctx.games(season):
        close = is_close(m.margin, close_threshold)
        blowout = is_blowout(m.margin, blowout_threshold)

        if m.winner_id is None:
            for team_id in (m.home_team_id, m.away_team_id):
                tally = tallies[ctx.key(m.year, team_id, season)]
                tally.years.add(m.year)
                tally.ties += 1
                if close:
                    tally.close_ties += 1
            continue

        winner = tallies[ctx.key(m.year, m.winner_id, season)]
        loser = tallies[ctx.key(m.year, m.loser_id, season)]
        winner.years.add(m.year)
        loser.years.add(m.year)
        winner.win_margins.append(m.margin)
        loser.loss_margins.append(m.margin)

        if close:
            winner.close_wins += 1
            loser.close_losses += 1
        if blowout:
            winner.blowout_wins += 1
            loser.blowout_losses += 1

    entries = []
    for key, tally in tallies.items():
        close_decided = tally.close_wins + tally.close_losses
        edge_wins = tally.close_wins + tally.blowout_wins
        edge_decided = close_decided + tally.blowout_wins + tally.blowout_losses
        close_win_pct = safe_pct(tally.close_wins, close_decided)
        overall_win_pct = safe_pct(edge_wins, edge_decided)

        entries.append(
            ClutchEntry(
                key=key,
                display_name=ctx.display_name(key, season),
                close_wins=tally.close_wins,
                close_losses=tally.close_losses,
                close_ties=tally.close_ties,
                total_close_games=close_decided + tally.close_ties,
                close_game_win_pct=close_win_pct,
                blowout_wins=tally.blowout_wins,
                blowout_losses=tally.blowout_losses,
                overall_win_pct=overall_win_pct,
                clutch_factor=close_win_pct - overall_win_pct,
                ties=tally.ties,
                avg_win_margin=(
                    sum(tally.win_margins) / len(tally.win_margins) if tally.win_margins else 0.0
                ),
                avg_loss_margin=(
                    sum(tally.loss_margins) / len(tally.loss_margins) if tally.loss_margins else 0.0
                ),
                seasons_played=len(tally.years),
            )
        )

    return ctx.publish(entries, season, lambda e: e.clutch_factor, descending=True)
