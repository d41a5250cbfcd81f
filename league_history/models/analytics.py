from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .owner import AggregationKey


class LuckEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: AggregationKey
    display_name: str
    actual_wins: int
    expected_wins: float
    luck_score: float
    luck_per_season: float
    all_play_wins: int
    all_play_losses: int
    all_play_ties: int
    all_play_win_pct: float
    weeks_played: int
    seasons_played: int

    @property
    def all_play_record(self) -> str:
        record = f"{self.all_play_wins}-{self.all_play_losses}"
        if self.all_play_ties:
            record += f"-{self.all_play_ties}"
        return record


class SeasonLuck(BaseModel):
    year: int
    luckiest: Optional[LuckEntry] = None
    unluckiest: Optional[LuckEntry] = None
    all_teams: List[LuckEntry] = Field(default_factory=list)


class LuckReport(BaseModel):
    all_time: List[LuckEntry] = Field(default_factory=list)
    by_season: List[SeasonLuck] = Field(default_factory=list)


class ConsistencyEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: AggregationKey
    display_name: str
    games_played: int
    avg_score: float
    std_dev: float
    coefficient_of_variation: float
    floor: float
    ceiling: float
    range: float
    boom_games: int
    bust_games: int
    boom_rate: float
    bust_rate: float
    high_score: float
    low_score: float
    seasons_played: int


class ClutchEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: AggregationKey
    display_name: str
    close_wins: int
    close_losses: int
    close_ties: int
    total_close_games: int
    close_game_win_pct: float
    blowout_wins: int
    blowout_losses: int
    overall_win_pct: float
    clutch_factor: float
    ties: int
    avg_win_margin: float
    avg_loss_margin: float
    seasons_played: int


class StrengthOfScheduleEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: AggregationKey
    display_name: str
    avg_opponent_score: float
    avg_opponent_win_pct: float
    sos_index: float
    league_avg_score: float
    games_played: int
    team_win_pct: float
    adjusted_win_pct: float
    seasons_played: int


class HighestSingleGame(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: Optional[AggregationKey] = None
    display_name: str = ""
    score: float = 0.0
    year: Optional[int] = None
    week: Optional[int] = None


class AnalyticsMeta(BaseModel):
    seasons_analyzed: int
    total_matchups: int
    owners_tracked: int
    close_threshold: float
    blowout_threshold: float


class AnalyticsReport(BaseModel):
    meta: AnalyticsMeta
    luck: LuckReport
    consistency: List[ConsistencyEntry] = Field(default_factory=list)
    clutch: List[ClutchEntry] = Field(default_factory=list)
    strength_of_schedule: List[StrengthOfScheduleEntry] = Field(default_factory=list)
    highest_single_game: HighestSingleGame = HighestSingleGame()
