from typing import Callable, Iterable, List, Optional, TypeVar

from league_history.identity.resolver import OwnerIdentityResolver
from league_history.models.matchup import Matchup
from league_history.models.owner import AggregationKey
from league_history.models.season import SeasonLedger

Entry = TypeVar("Entry")


class AnalyticsContext:
    """Shared view of the league for the advanced metrics.

    All-time views key every game by owner identity (pseudo identities
    included) and aggregate over the whole history; only the finished list
    is narrowed to current identities. Single-season views key by team id and
    are never narrowed.
    """

    def __init__(self, ledger: SeasonLedger, resolver: OwnerIdentityResolver):
        self.ledger = ledger
        self.resolver = resolver
        self.matchups: List[Matchup] = ledger.all_matchups()

    def key(self, year: int, team_id: int, season: Optional[int]) -> AggregationKey:
        """Team key for single-season views, owner identity for all-time views."""
        return self.resolver.key_for(year, team_id, by_owner=season is None)

    def games(self, season: Optional[int] = None, include_playoffs: bool = False) -> List[Matchup]:
        return [
            m
            for m in self.matchups
            if (season is None or m.year == season) and (include_playoffs or not m.is_playoff)
        ]

    def display_name(self, key: AggregationKey, season: Optional[int]) -> str:
        return self.resolver.display_name(key, season)

    def publish(
        self,
        entries: Iterable[Entry],
        season: Optional[int],
        headline: Callable[[Entry], float],
        descending: bool = False,
    ) -> List[Entry]:
        """Filters all-time results to current identities and sorts by headline
        value, then display name."""
        if season is None:
            entries = [e for e in entries if self.resolver.is_current(e.key)]
        sign = -1 if descending else 1
        return sorted(entries, key=lambda e: (sign * headline(e), e.display_name, str(e.key)))
