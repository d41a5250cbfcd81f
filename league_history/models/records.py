from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import StreakType
from .owner import AggregationKey


class ScoreEntry(BaseModel):
    """One team's score in one game."""

    model_config = ConfigDict(frozen=True)

    team_id: int
    team_name: str
    score: float
    opponent_id: int
    opponent_name: str
    opponent_score: float
    year: int
    week: int
    is_playoff: bool


class MarginEntry(BaseModel):
    """A game ranked by its margin or combined points. Winner and loser are None on ties."""

    model_config = ConfigDict(frozen=True)

    year: int
    week: int
    is_playoff: bool
    home_team_id: int
    away_team_id: int
    winner_id: Optional[int] = None
    winner_name: Optional[str] = None
    loser_id: Optional[int] = None
    loser_name: Optional[str] = None
    winner_score: float
    loser_score: float
    margin: float
    total_points: float

    @property
    def is_tie(self) -> bool:
        return self.winner_id is None


class StreakPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    week: int


class Streak(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: AggregationKey
    display_name: str
    streak_type: StreakType
    length: int = Field(..., ge=1)
    start: StreakPoint
    end: StreakPoint


class RecordBook(BaseModel):
    highest_scores: List[ScoreEntry] = Field(default_factory=list)
    lowest_scores: List[ScoreEntry] = Field(default_factory=list)
    biggest_blowouts: List[MarginEntry] = Field(default_factory=list)
    closest_games: List[MarginEntry] = Field(default_factory=list)
    highest_scoring_games: List[MarginEntry] = Field(default_factory=list)
    longest_win_streaks: List[Streak] = Field(default_factory=list)
    longest_losing_streaks: List[Streak] = Field(default_factory=list)
