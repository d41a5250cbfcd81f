# league_history/models/team.py
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, computed_field

from league_history.utils.misc_utils import format_owner_name


class Member(BaseModel):
    """A league member as listed in a season roster or embedded on a team."""

    model_config = ConfigDict(frozen=True)

    member_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @computed_field  # type: ignore[misc]
    @property
    def display_name(self) -> Optional[str]:
        """Name formatted as "First L.", or None when the member has no name."""
        if not self.first_name and not self.last_name:
            return None
        return format_owner_name(self.first_name, self.last_name)


class TeamRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    points_against: float = 0.0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties


class Team(BaseModel):
    """A team snapshot for one season. The id is only unique within that season."""

    model_config = ConfigDict(frozen=True)

    team_id: int
    year: int
    name: str
    abbreviation: str
    primary_owner_id: Optional[str] = None
    embedded_owners: Tuple[Member, ...] = ()
    embedded_members: Tuple[Member, ...] = ()
    record: TeamRecord = TeamRecord()
    final_rank: Optional[int] = None
    playoff_seed: Optional[int] = None

    @property
    def win_loss_margin(self) -> int:
        return self.record.wins - self.record.losses
