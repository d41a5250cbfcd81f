from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class H2HGame(BaseModel):
    """A meeting between two teams. Scores follow the orientation of the
    record or detail view holding it."""

    model_config = ConfigDict(frozen=True)

    year: int
    week: int
    team1_score: float
    team2_score: float
    is_playoff: bool


class H2HRecord(BaseModel):
    team1: int
    team2: int
    team1_wins: int = 0
    team2_wins: int = 0
    ties: int = 0
    matchups: List[H2HGame] = Field(default_factory=list)

    @property
    def pair(self) -> Tuple[int, int]:
        return (self.team1, self.team2)


class H2HCell(BaseModel):
    """Record of the row team against the column team."""

    model_config = ConfigDict(frozen=True)

    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties


class H2HSide(BaseModel):
    model_config = ConfigDict(frozen=True)

    team_id: int
    name: str
    wins: int


class H2HDetail(BaseModel):
    team1: H2HSide
    team2: H2HSide
    ties: int = 0
    matchups: List[H2HGame] = Field(default_factory=list)
