from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field

from .enums import Outcome, PlayoffTier


class Matchup(BaseModel):
    """A single scheduled game between two teams of the same season."""

    model_config = ConfigDict(frozen=True)  # Make instances immutable

    year: int
    week: int
    is_playoff: bool = False
    playoff_tier: Optional[PlayoffTier] = None
    home_team_id: int
    away_team_id: int
    home_score: float
    away_score: float

    @computed_field  # type: ignore[misc]
    @property
    def margin(self) -> float:
        return abs(self.home_score - self.away_score)

    @property
    def is_tie(self) -> bool:
        return self.home_score == self.away_score

    @computed_field  # type: ignore[misc]
    @property
    def winner_id(self) -> Optional[int]:
        """Winning team id, None on a tie."""
        if self.home_score > self.away_score:
            return self.home_team_id
        if self.away_score > self.home_score:
            return self.away_team_id
        return None

    @computed_field  # type: ignore[misc]
    @property
    def loser_id(self) -> Optional[int]:
        """Losing team id, None on a tie."""
        if self.home_score > self.away_score:
            return self.away_team_id
        if self.away_score > self.home_score:
            return self.home_team_id
        return None

    @property
    def total_points(self) -> float:
        return self.home_score + self.away_score

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def score_for(self, team_id: int) -> float:
        if team_id == self.home_team_id:
            return self.home_score
        if team_id == self.away_team_id:
            return self.away_score
        raise ValueError(f"Team {team_id} did not play in {self.describe()}")

    def opponent_of(self, team_id: int) -> int:
        if team_id == self.home_team_id:
            return self.away_team_id
        if team_id == self.away_team_id:
            return self.home_team_id
        raise ValueError(f"Team {team_id} did not play in {self.describe()}")

    def outcome_for(self, team_id: int) -> Outcome:
        own = self.score_for(team_id)
        other = self.score_for(self.opponent_of(team_id))
        if own > other:
            return Outcome.WIN
        if own < other:
            return Outcome.LOSS
        return Outcome.TIE

    def describe(self) -> str:
        return (
            f"{self.year} week {self.week}: team {self.away_team_id} ({self.away_score}) "
            f"@ team {self.home_team_id} ({self.home_score})"
        )
