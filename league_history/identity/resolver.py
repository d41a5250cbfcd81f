from typing import Dict, List, Mapping, Optional, Set, Tuple

from loguru import logger

from league_history.models.enums import KeyKind
from league_history.models.owner import AggregationKey, Owner
from league_history.models.season import Season, SeasonLedger
from league_history.models.team import Team

UNKNOWN_OWNER = "Unknown Owner"


class OwnerIdentityResolver:
    """Maps (year, team id) to a canonical owner identity across seasons.

    Owner ids are read per season from the best source available: the member
    roster, the team's embedded owner records, its embedded member records,
    and finally the bare primary-owner id. Teams with none of these become a
    pseudo identity keyed on the team id so their games are never dropped.

    The co-owner mapping folds several raw ids into one canonical id; the
    display-name table overrides how that canonical id is shown.
    """

    def __init__(
        self,
        ledger: SeasonLedger,
        co_owner_mappings: Optional[Mapping[str, str]] = None,
        co_owner_display_names: Optional[Mapping[str, str]] = None,
    ):
        self.ledger = ledger
        self.co_owner_mappings: Dict[str, str] = dict(co_owner_mappings or {})
        self.co_owner_display_names: Dict[str, str] = dict(co_owner_display_names or {})

        self._team_owner: Dict[Tuple[int, int], AggregationKey] = {}
        self._member_names: Dict[str, str] = {}
        self._owner_years: Dict[str, List[int]] = {}
        self._team_names: Dict[int, str] = {}

        for season in ledger:
            self._register_season(season)

        self.current_keys: Set[AggregationKey] = self._identify_current()
        logger.info(
            f"Resolved {len(self._owner_years)} owner identities; "
            f"{len(self.current_keys)} current"
        )

    def canonical_owner_id(self, owner_id: str) -> str:
        return self.co_owner_mappings.get(owner_id, owner_id)

    def _register_season(self, season: Season) -> None:
        # Roster names first so they win over names embedded on teams
        for member in season.members:
            if member.display_name and member.member_id not in self._member_names:
                self._member_names[member.member_id] = member.display_name

        for team in season.teams:
            key = self._resolve_team_owner(season, team)
            self._team_owner[(season.year, team.team_id)] = key
            self._team_names[team.team_id] = team.name
            if not key.is_pseudo:
                years = self._owner_years.setdefault(key.value, [])
                if season.year not in years:
                    years.append(season.year)

    def _resolve_team_owner(self, season: Season, team: Team) -> AggregationKey:
        raw_id: Optional[str] = None

        if team.primary_owner_id and season.member(team.primary_owner_id):
            raw_id = team.primary_owner_id
        elif team.embedded_owners:
            raw_id = team.embedded_owners[0].member_id
        elif team.embedded_members:
            raw_id = team.embedded_members[0].member_id
        elif team.primary_owner_id:
            raw_id = team.primary_owner_id

        for embedded in team.embedded_owners + team.embedded_members:
            if embedded.display_name and embedded.member_id not in self._member_names:
                self._member_names[embedded.member_id] = embedded.display_name

        if raw_id is None:
            logger.debug(f"{season.year}: team {team.team_id} has no owner, using pseudo identity")
            return AggregationKey.pseudo(team.team_id)
        return AggregationKey.owner(self.canonical_owner_id(raw_id))

    def _identify_current(self) -> Set[AggregationKey]:
        latest = self.ledger.most_recent()
        if latest is None:
            return set()
        return {self._team_owner[(latest.year, team.team_id)] for team in latest.teams}

    def owner_key(self, year: int, team_id: int) -> AggregationKey:
        """Owner identity for a team in a season, pseudo when no owner is known."""
        return self._team_owner.get((year, team_id), AggregationKey.pseudo(team_id))

    def key_for(self, year: int, team_id: int, by_owner: bool) -> AggregationKey:
        if by_owner:
            return self.owner_key(year, team_id)
        return AggregationKey.team(team_id)

    def is_current(self, key: AggregationKey) -> bool:
        """Whether an owner or pseudo identity plays in the most recent season."""
        if key.kind == KeyKind.TEAM:
            return False
        if key.kind == KeyKind.OWNER:
            key = AggregationKey.owner(self.canonical_owner_id(key.value))
        return key in self.current_keys

    def owner_display_name(self, owner_id: str) -> str:
        canonical_id = self.canonical_owner_id(owner_id)
        if canonical_id in self.co_owner_display_names:
            return self.co_owner_display_names[canonical_id]
        return self._member_names.get(canonical_id, UNKNOWN_OWNER)

    def team_display_name(self, team_id: int) -> str:
        """Owner name from the latest season the team id appears in."""
        for year in reversed(self.ledger.years()):
            key = self._team_owner.get((year, team_id))
            if key is None:
                continue
            if key.is_pseudo:
                return self._team_names.get(team_id, f"Team {team_id}")
            name = self.owner_display_name(key.value)
            if name != UNKNOWN_OWNER:
                return name
            return self._team_names.get(team_id, f"Team {team_id}")
        return f"Team {team_id}"

    def team_label(self, year: int, team_id: int) -> str:
        """Season label formatted as Team Name (Owner)."""
        season = self.ledger.get(year)
        team = season.team(team_id) if season else None
        if team is None:
            return self.team_display_name(team_id)
        key = self.owner_key(year, team_id)
        if key.is_pseudo:
            return team.name
        return f"{team.name} ({self.owner_display_name(key.value)})"

    def display_name(self, key: AggregationKey, year: Optional[int] = None) -> str:
        if key.is_pseudo:
            return self._team_names.get(key.team_id, f"Team {key.team_id}")
        if key.team_id is not None:
            if year is not None:
                return self.team_label(year, key.team_id)
            return self.team_display_name(key.team_id)
        return self.owner_display_name(key.value)

    def owners(self) -> List[Owner]:
        """Every canonical owner seen, ordered by display name."""
        owners = [
            Owner(
                owner_id=owner_id,
                display_name=self.owner_display_name(owner_id),
                is_current=AggregationKey.owner(owner_id) in self.current_keys,
                first_season=min(years),
                last_season=max(years),
            )
            for owner_id, years in self._owner_years.items()
        ]
        return sorted(owners, key=lambda o: (o.display_name, o.owner_id))
