from typing import List

from pydantic import BaseModel, Field, computed_field

from .owner import AggregationKey


class CareerRecord(BaseModel):
    """Running career totals for one identity. Only the career fold mutates it."""

    key: AggregationKey
    display_name: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0
    championships: int = 0
    championship_appearances: int = 0
    playoff_appearances: int = 0
    seasons_played: int = 0
    years: List[int] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @computed_field  # type: ignore[misc]
    @property
    def win_pct(self) -> float:
        """Share of all games won, 0.0 before any game is played."""
        if not self.games_played:
            return 0.0
        return self.wins / self.games_played

    @computed_field  # type: ignore[misc]
    @property
    def points_per_game(self) -> float:
        if not self.games_played:
            return 0.0
        return self.points_for / self.games_played


class CareerLeaders(BaseModel):
    """Full sorted leaderboards; nothing is truncated here."""

    most_wins: List[CareerRecord] = Field(default_factory=list)
    best_win_pct: List[CareerRecord] = Field(default_factory=list)
    most_championships: List[CareerRecord] = Field(default_factory=list)
    most_championship_appearances: List[CareerRecord] = Field(default_factory=list)
    most_playoff_appearances: List[CareerRecord] = Field(default_factory=list)
    most_points_for: List[CareerRecord] = Field(default_factory=list)
    best_points_per_game: List[CareerRecord] = Field(default_factory=list)
