from typing import Dict, List, Optional, Tuple

from loguru import logger

from league_history.identity.resolver import OwnerIdentityResolver
from league_history.models.enums import Outcome, StreakType
from league_history.models.matchup import Matchup
from league_history.models.owner import AggregationKey
from league_history.models.records import (
    MarginEntry,
    RecordBook,
    ScoreEntry,
    Streak,
    StreakPoint,
)
from league_history.models.season import SeasonLedger


def is_score_eligible(year: int, week: int, legacy_cutoff_year: int, legacy_week_limit: int) -> bool:
    """Legacy seasons only count weeks up to the limit; later seasons count every week."""
    if year <= legacy_cutoff_year:
        return week <= legacy_week_limit
    return True


def score_entries(
    matchups: List[Matchup], resolver: OwnerIdentityResolver
) -> List[ScoreEntry]:
    entries: List[ScoreEntry] = []
    for m in matchups:
        for team_id in (m.home_team_id, m.away_team_id):
            opponent_id = m.opponent_of(team_id)
            entries.append(
                ScoreEntry(
                    team_id=team_id,
                    team_name=resolver.team_display_name(team_id),
                    score=m.score_for(team_id),
                    opponent_id=opponent_id,
                    opponent_name=resolver.team_display_name(opponent_id),
                    opponent_score=m.score_for(opponent_id),
                    year=m.year,
                    week=m.week,
                    is_playoff=m.is_playoff,
                )
            )
    return entries


def margin_entry(m: Matchup, resolver: OwnerIdentityResolver) -> MarginEntry:
    return MarginEntry(
        year=m.year,
        week=m.week,
        is_playoff=m.is_playoff,
        home_team_id=m.home_team_id,
        away_team_id=m.away_team_id,
        winner_id=m.winner_id,
        winner_name=resolver.team_display_name(m.winner_id) if m.winner_id is not None else None,
        loser_id=m.loser_id,
        loser_name=resolver.team_display_name(m.loser_id) if m.loser_id is not None else None,
        winner_score=max(m.home_score, m.away_score),
        loser_score=min(m.home_score, m.away_score),
        margin=m.margin,
        total_points=m.total_points,
    )


def find_streaks(
    matchups: List[Matchup], resolver: OwnerIdentityResolver
) -> Tuple[List[Streak], List[Streak]]:
    """Longest win streak and longest losing streak per team id.

    Each team's games are ordered by (year, week) and scanned once. A tie ends
    both the running win streak and the running loss streak.
    """
    games: Dict[int, List[Tuple[int, int, Outcome]]] = {}
    for m in matchups:
        for team_id in (m.home_team_id, m.away_team_id):
            games.setdefault(team_id, []).append((m.year, m.week, m.outcome_for(team_id)))

    win_streaks: List[Streak] = []
    loss_streaks: List[Streak] = []

    for team_id in sorted(games):
        history = sorted(games[team_id], key=lambda g: (g[0], g[1]))
        best: Dict[StreakType, Optional[Tuple[int, StreakPoint, StreakPoint]]] = {
            StreakType.WIN: None,
            StreakType.LOSS: None,
        }
        current_type: Optional[StreakType] = None
        current_length = 0
        current_start: Optional[StreakPoint] = None

        for year, week, outcome in history:
            point = StreakPoint(year=year, week=week)
            if outcome == Outcome.TIE:
                current_type, current_length, current_start = None, 0, None
                continue

            streak_type = StreakType.WIN if outcome == Outcome.WIN else StreakType.LOSS
            if streak_type != current_type:
                current_type, current_length, current_start = streak_type, 0, point
            current_length += 1

            record = best[streak_type]
            if record is None or current_length > record[0]:
                best[streak_type] = (current_length, current_start, point)

        key = AggregationKey.team(team_id)
        name = resolver.team_display_name(team_id)
        for streak_type, target in ((StreakType.WIN, win_streaks), (StreakType.LOSS, loss_streaks)):
            record = best[streak_type]
            if record is not None:
                length, start, end = record
                target.append(
                    Streak(
                        key=key,
                        display_name=name,
                        streak_type=streak_type,
                        length=length,
                        start=start,
                        end=end,
                    )
                )

    def order(streak: Streak):
        return (-streak.length, streak.display_name, streak.start.year, streak.start.week)

    return sorted(win_streaks, key=order), sorted(loss_streaks, key=order)


def build_record_book(
    ledger: SeasonLedger,
    resolver: OwnerIdentityResolver,
    legacy_cutoff_year: int = 2015,
    legacy_week_limit: int = 12,
    depth: int = 10,
) -> RecordBook:
    matchups = ledger.all_matchups()

    eligible_scores = [
        entry
        for entry in score_entries(matchups, resolver)
        if is_score_eligible(entry.year, entry.week, legacy_cutoff_year, legacy_week_limit)
    ]
    margins = [margin_entry(m, resolver) for m in matchups]
    win_streaks, loss_streaks = find_streaks(matchups, resolver)

    def when(entry) -> Tuple[int, int]:
        return (entry.year, entry.week)

    book = RecordBook(
        highest_scores=sorted(
            eligible_scores, key=lambda s: (-s.score, when(s), s.team_id)
        )[:depth],
        lowest_scores=sorted(
            eligible_scores, key=lambda s: (s.score, when(s), s.team_id)
        )[:depth],
        biggest_blowouts=sorted(
            margins, key=lambda e: (-e.margin, when(e), e.home_team_id)
        )[:depth],
        closest_games=sorted(
            margins, key=lambda e: (e.margin, when(e), e.home_team_id)
        )[:depth],
        highest_scoring_games=sorted(
            margins, key=lambda e: (-e.total_points, when(e), e.home_team_id)
        )[:depth],
        longest_win_streaks=win_streaks[:depth],
        longest_losing_streaks=loss_streaks[:depth],
    )
    logger.debug(
        f"Record book built from {len(matchups)} matchups "
        f"({len(eligible_scores)} eligible scores)"
    )
    return book
