from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .enums import ChampionSource
from .matchup import Matchup
from .team import Member, Team


class SeasonSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    regular_season_weeks: int
    playoff_team_count: Optional[int] = None
    league_name: Optional[str] = None
    league_size: Optional[int] = None


class Season(BaseModel):
    """A normalized league-year. Built once by the normalizer, then only read."""

    model_config = ConfigDict(frozen=True)

    year: int
    teams: Tuple[Team, ...]
    matchups: Tuple[Matchup, ...] = ()
    members: Tuple[Member, ...] = ()
    settings: SeasonSettings
    champion_id: Optional[int] = None
    champion_source: ChampionSource = ChampionSource.NONE
    championship_participants: Tuple[int, ...] = ()

    def team(self, team_id: int) -> Optional[Team]:
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def member(self, member_id: str) -> Optional[Member]:
        for member in self.members:
            if member.member_id == member_id:
                return member
        return None

    @property
    def regular_season_matchups(self) -> List[Matchup]:
        return [m for m in self.matchups if not m.is_playoff]

    @property
    def playoff_matchups(self) -> List[Matchup]:
        return [m for m in self.matchups if m.is_playoff]

    def standings(self) -> List[Team]:
        """Teams ordered by win percentage, then points for."""

        def win_pct(team: Team) -> float:
            decided = team.record.wins + team.record.losses
            return team.record.wins / decided if decided else 0.0

        return sorted(
            self.teams,
            key=lambda t: (-win_pct(t), -t.record.points_for, t.team_id),
        )


class SeasonLedger:
    """Seasons keyed by year, always iterated oldest first."""

    def __init__(self, seasons: Optional[List[Season]] = None):
        self._seasons: Dict[int, Season] = {}
        for season in seasons or []:
            self.add(season)

    def add(self, season: Season) -> None:
        if season.year in self._seasons:
            raise ValueError(f"Season {season.year} is already in the ledger")
        self._seasons[season.year] = season
        # Keep insertion order chronological regardless of input order
        self._seasons = dict(sorted(self._seasons.items()))

    def years(self) -> List[int]:
        return list(self._seasons.keys())

    def seasons(self) -> List[Season]:
        return list(self._seasons.values())

    def get(self, year: int) -> Optional[Season]:
        return self._seasons.get(year)

    def most_recent(self) -> Optional[Season]:
        """Latest season that has at least one team."""
        for year in reversed(self.years()):
            season = self._seasons[year]
            if season.teams:
                return season
        return None

    def all_matchups(self) -> List[Matchup]:
        """Every matchup, by year then week."""
        return [
            matchup
            for season in self._seasons.values()
            for matchup in sorted(season.matchups, key=lambda m: m.week)
        ]

    def __iter__(self) -> Iterator[Season]:
        return iter(self.seasons())

    def __len__(self) -> int:
        return len(self._seasons)

    def __contains__(self, year: object) -> bool:
        return year in self._seasons
