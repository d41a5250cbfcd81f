from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from league_history.calculation.head_to_head import H2HMatrix

from .analytics import AnalyticsReport
from .career import CareerLeaders, CareerRecord
from .enums import ChampionSource
from .matchup import Matchup
from .owner import AggregationKey, Owner
from .records import RecordBook, ScoreEntry
from .season import SeasonLedger, SeasonSettings
from .team import Team


class ChampionEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    team_id: int
    team_name: str
    owner_name: str
    source: ChampionSource


class SeasonSummary(BaseModel):
    """Headline view of one season."""

    model_config = ConfigDict(frozen=True)

    year: int
    champion_id: Optional[int] = None
    champion_name: Optional[str] = None
    champion_source: ChampionSource = ChampionSource.NONE
    standings: List[Team] = Field(default_factory=list)
    settings: SeasonSettings


class SeasonDetails(BaseModel):
    summary: SeasonSummary
    matchups_by_week: Dict[int, List[Matchup]] = Field(default_factory=dict)
    season_high: Optional[ScoreEntry] = None


class LeagueHistory(BaseModel):
    """Everything one engine run derives from a set of season payloads."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    seasons: SeasonLedger
    season_summaries: List[SeasonSummary] = Field(default_factory=list)
    champions: List[ChampionEntry] = Field(default_factory=list)
    matchups: List[Matchup] = Field(default_factory=list)
    team_careers: Dict[AggregationKey, CareerRecord] = Field(default_factory=dict)
    owner_careers: Dict[AggregationKey, CareerRecord] = Field(default_factory=dict)
    team_leaders: CareerLeaders = Field(default_factory=CareerLeaders)
    owner_leaders: CareerLeaders = Field(default_factory=CareerLeaders)
    record_book: RecordBook = Field(default_factory=RecordBook)
    head_to_head: Optional[H2HMatrix] = None
    analytics: Optional[AnalyticsReport] = None
    owners: List[Owner] = Field(default_factory=list)

    def summary(self, year: int) -> Optional[SeasonSummary]:
        for summary in self.season_summaries:
            if summary.year == year:
                return summary
        return None

    def season_details(self, year: int) -> Optional[SeasonDetails]:
        """Summary, matchups grouped by week and the top score for one season."""
        summary = self.summary(year)
        if summary is None:
            return None

        by_week: Dict[int, List[Matchup]] = {}
        for m in self.matchups:
            if m.year == year:
                by_week.setdefault(m.week, []).append(m)

        scores = self._season_scores(year)
        return SeasonDetails(
            summary=summary,
            matchups_by_week=dict(sorted(by_week.items())),
            season_high=scores[0] if scores else None,
        )

    def _season_scores(self, year: int) -> List[ScoreEntry]:
        scores = []
        for m in self.matchups:
            if m.year != year:
                continue
            for team_id in (m.home_team_id, m.away_team_id):
                opponent_id = m.opponent_of(team_id)
                scores.append(
                    ScoreEntry(
                        team_id=team_id,
                        team_name=self._team_name(year, team_id),
                        score=m.score_for(team_id),
                        opponent_id=opponent_id,
                        opponent_name=self._team_name(year, opponent_id),
                        opponent_score=m.score_for(opponent_id),
                        year=m.year,
                        week=m.week,
                        is_playoff=m.is_playoff,
                    )
                )
        return sorted(scores, key=lambda s: (-s.score, s.week, s.team_id))

    def _team_name(self, year: int, team_id: int) -> str:
        season = self.seasons.get(year)
        team = season.team(team_id) if season else None
        return team.name if team else f"Team {team_id}"

    def all_teams(self) -> List[Team]:
        """Every team snapshot, oldest season first."""
        return [team for season in self.seasons for team in season.teams]

    def all_seasons(self) -> List[int]:
        """Season years, most recent first."""
        return sorted(self.seasons.years(), reverse=True)
