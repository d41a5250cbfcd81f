from typing import Optional

from loguru import logger

from league_history.analytics.clutch import calculate_clutch
from league_history.analytics.consistency import calculate_consistency
from league_history.analytics.context import AnalyticsContext
from league_history.analytics.luck import calculate_luck, season_luck_breakdown
from league_history.analytics.strength_of_schedule import calculate_strength_of_schedule
from league_history.calculation.record_book import is_score_eligible
from league_history.config.settings import EngineSettings
from league_history.identity.resolver import OwnerIdentityResolver
from league_history.models.analytics import (
    AnalyticsMeta,
    AnalyticsReport,
    HighestSingleGame,
    LuckReport,
)
from league_history.models.season import SeasonLedger


class AdvancedAnalyticsEngine:
    """Luck, consistency, clutch and strength-of-schedule over a ledger."""

    def __init__(
        self,
        ledger: SeasonLedger,
        resolver: OwnerIdentityResolver,
        settings: Optional[EngineSettings] = None,
    ):
        self.settings = settings or EngineSettings()
        self.ctx = AnalyticsContext(ledger, resolver)

    def highest_single_game(self) -> HighestSingleGame:
        """Best regular-season score by a current owner identity."""
        best = HighestSingleGame()
        for m in self.ctx.games():
            if not is_score_eligible(
                m.year,
                m.week,
                self.settings.highlight_cutoff_year,
                self.settings.legacy_week_limit,
            ):
                continue
            for team_id in (m.home_team_id, m.away_team_id):
                key = self.ctx.key(m.year, team_id, None)
                score = m.score_for(team_id)
                # First occurrence wins on equal scores; games are chronological
                if score > best.score and self.ctx.resolver.is_current(key):
                    best = HighestSingleGame(
                        key=key,
                        display_name=self.ctx.display_name(key, None),
                        score=score,
                        year=m.year,
                        week=m.week,
                    )
        return best

    def generate_report(self) -> AnalyticsReport:
        s = self.settings
        ledger = self.ctx.ledger
        logger.info(f"Generating analytics for {len(ledger)} season(s)")

        report = AnalyticsReport(
            meta=AnalyticsMeta(
                seasons_analyzed=len(ledger),
                total_matchups=len(self.ctx.matchups),
                owners_tracked=len(self.ctx.resolver.owners()),
                close_threshold=s.close_threshold,
                blowout_threshold=s.blowout_threshold,
            ),
            luck=LuckReport(
                all_time=calculate_luck(self.ctx),
                by_season=season_luck_breakdown(self.ctx),
            ),
            consistency=calculate_consistency(self.ctx, min_games=s.min_consistency_games),
            clutch=calculate_clutch(
                self.ctx,
                close_threshold=s.close_threshold,
                blowout_threshold=s.blowout_threshold,
            ),
            strength_of_schedule=calculate_strength_of_schedule(self.ctx),
            highest_single_game=self.highest_single_game(),
        )

        logger.debug(
            f"Analytics: {len(report.luck.all_time)} luck, "
            f"{len(report.consistency)} consistency, {len(report.clutch)} clutch, "
            f"{len(report.strength_of_schedule)} SOS entries"
        )
        return report

    def season_report(self, year: int) -> AnalyticsReport:
        """Single-season view keyed by team and never narrowed to current owners."""
        s = self.settings
        season = self.ctx.ledger.get(year)
        if season is None:
            raise KeyError(f"No season {year} in the ledger")

        year_luck = calculate_luck(self.ctx, year)
        return AnalyticsReport(
            meta=AnalyticsMeta(
                seasons_analyzed=1,
                total_matchups=len(season.matchups),
                owners_tracked=len(season.teams),
                close_threshold=s.close_threshold,
                blowout_threshold=s.blowout_threshold,
            ),
            luck=LuckReport(all_time=year_luck),
            consistency=calculate_consistency(
                self.ctx, season=year, min_games=s.min_consistency_games
            ),
            clutch=calculate_clutch(
                self.ctx,
                season=year,
                close_threshold=s.close_threshold,
                blowout_threshold=s.blowout_threshold,
            ),
            strength_of_schedule=calculate_strength_of_schedule(self.ctx, season=year),
        )
