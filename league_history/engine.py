from typing import Any, List, Mapping, Optional

from loguru import logger

from league_history.analytics.engine import AdvancedAnalyticsEngine
from league_history.calculation.career import build_leaders, careers_by_owner, careers_by_team
from league_history.calculation.head_to_head import H2HMatrix
from league_history.calculation.record_book import build_record_book
from league_history.config.settings import EngineSettings, get_settings
from league_history.identity.resolver import OwnerIdentityResolver
from league_history.models.league import ChampionEntry, LeagueHistory, SeasonSummary
from league_history.models.season import SeasonLedger
from league_history.normalization.normalizer import NormalizationError, SeasonNormalizer


class NoValidSeasonsError(NormalizationError):
    """Raised when not a single season survives normalization."""

    pass


class LeagueHistoryEngine:
    """Runs the full pipeline: normalize, resolve owners, then derive every statistic.

    Each call to run() builds its own ledger and resolver, so an engine can be
    reused and two runs over the same payloads give the same result.
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        normalizer: Optional[SeasonNormalizer] = None,
    ):
        self.settings = settings or get_settings()
        self.normalizer = normalizer or SeasonNormalizer(min_year=self.settings.min_year)

    def run(self, payloads: Mapping[Any, Mapping[str, Any]]) -> LeagueHistory:
        s = self.settings
        logger.info(f"Starting league history run over {len(payloads)} payload(s)")

        ledger = self.normalizer.normalize(payloads)
        if not len(ledger):
            raise NoValidSeasonsError("No season could be normalized from the given payloads")

        resolver = OwnerIdentityResolver(
            ledger,
            co_owner_mappings=s.co_owner_mappings,
            co_owner_display_names=s.co_owner_display_names,
        )

        team_careers = careers_by_team(ledger, resolver, s.default_playoff_team_count)
        owner_careers = careers_by_owner(ledger, resolver, s.default_playoff_team_count)
        logger.info(
            f"Careers folded: {len(team_careers)} team(s), {len(owner_careers)} owner identities"
        )

        matchups = ledger.all_matchups()
        history = LeagueHistory(
            seasons=ledger,
            season_summaries=self._season_summaries(ledger, resolver),
            champions=self._champions(ledger, resolver),
            matchups=matchups,
            team_careers=team_careers,
            owner_careers=owner_careers,
            team_leaders=build_leaders(
                team_careers, s.min_games_for_win_pct, s.min_games_for_ppg
            ),
            owner_leaders=build_leaders(
                owner_careers, s.min_games_for_win_pct, s.min_games_for_ppg
            ),
            record_book=build_record_book(
                ledger,
                resolver,
                legacy_cutoff_year=s.legacy_cutoff_year,
                legacy_week_limit=s.legacy_week_limit,
                depth=s.record_book_depth,
            ),
            head_to_head=H2HMatrix.build(
                matchups, resolver, {team.team_id for season in ledger for team in season.teams}
            ),
            analytics=AdvancedAnalyticsEngine(ledger, resolver, s).generate_report(),
            owners=resolver.owners(),
        )

        logger.success(
            f"League history complete: {len(ledger)} season(s), {len(matchups)} matchups, "
            f"{len(history.champions)} champion(s)"
        )
        return history

    @staticmethod
    def _season_summaries(
        ledger: SeasonLedger, resolver: OwnerIdentityResolver
    ) -> List[SeasonSummary]:
        summaries = []
        for season in ledger:
            champion_name = None
            if season.champion_id is not None:
                champion_name = resolver.team_label(season.year, season.champion_id)
            summaries.append(
                SeasonSummary(
                    year=season.year,
                    champion_id=season.champion_id,
                    champion_name=champion_name,
                    champion_source=season.champion_source,
                    standings=season.standings(),
                    settings=season.settings,
                )
            )
        return summaries

    @staticmethod
    def _champions(
        ledger: SeasonLedger, resolver: OwnerIdentityResolver
    ) -> List[ChampionEntry]:
        champions = []
        for season in ledger:
            if season.champion_id is None:
                logger.debug(f"{season.year}: no champion could be resolved")
                continue
            team = season.team(season.champion_id)
            key = resolver.owner_key(season.year, season.champion_id)
            champions.append(
                ChampionEntry(
                    year=season.year,
                    team_id=season.champion_id,
                    team_name=team.name if team else f"Team {season.champion_id}",
                    owner_name=resolver.display_name(key),
                    source=season.champion_source,
                )
            )
        return champions
