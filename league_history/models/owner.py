from typing import Optional

from pydantic import BaseModel, ConfigDict

from .enums import KeyKind


class AggregationKey(BaseModel):
    """Identity a statistic is grouped under: a team slot, an owner, or a
    pseudo-owner standing in for a team nobody could be attributed to."""

    model_config = ConfigDict(frozen=True)

    kind: KeyKind
    value: str

    @classmethod
    def team(cls, team_id: int) -> "AggregationKey":
        return cls(kind=KeyKind.TEAM, value=str(team_id))

    @classmethod
    def owner(cls, owner_id: str) -> "AggregationKey":
        return cls(kind=KeyKind.OWNER, value=owner_id)

    @classmethod
    def pseudo(cls, team_id: int) -> "AggregationKey":
        return cls(kind=KeyKind.PSEUDO, value=str(team_id))

    @property
    def is_pseudo(self) -> bool:
        return self.kind == KeyKind.PSEUDO

    @property
    def team_id(self) -> Optional[int]:
        """Team id for team and pseudo keys."""
        if self.kind in (KeyKind.TEAM, KeyKind.PSEUDO):
            return int(self.value)
        return None

    def __str__(self) -> str:
        if self.kind == KeyKind.PSEUDO:
            return f"team-{self.value}"
        return self.value


class Owner(BaseModel):
    owner_id: str
    display_name: str
    is_current: bool = False
    first_season: Optional[int] = None
    last_season: Optional[int] = None
