from typing import Callable, Dict, List

from loguru import logger

from league_history.identity.resolver import OwnerIdentityResolver
from league_history.models.career import CareerLeaders, CareerRecord
from league_history.models.owner import AggregationKey
from league_history.models.season import Season, SeasonLedger
from league_history.models.team import Team

KeyFunction = Callable[[Season, Team], AggregationKey]


def fold_careers(
    ledger: SeasonLedger,
    key_fn: KeyFunction,
    resolver: OwnerIdentityResolver,
    default_playoff_team_count: int = 6,
) -> Dict[AggregationKey, CareerRecord]:
    """Folds every season's team records into career totals, oldest season first.

    Args:
        ledger: Normalized seasons.
        key_fn: Picks the identity a team-season is credited to.
        resolver: Supplies display names for the resulting keys.
        default_playoff_team_count: Playoff field size for seasons that do not report one.

    Returns:
        Career records keyed by identity, in first-seen order.
    """
    careers: Dict[AggregationKey, CareerRecord] = {}

    for season in ledger:
        playoff_team_count = (
            season.settings.playoff_team_count or default_playoff_team_count
        )
        for team in season.teams:
            key = key_fn(season, team)
            if key not in careers:
                careers[key] = CareerRecord(key=key, display_name=resolver.display_name(key))
            career = careers[key]

            career.wins += team.record.wins
            career.losses += team.record.losses
            career.ties += team.record.ties
            career.points_for += team.record.points_for
            career.points_against += team.record.points_against
            if season.year not in career.years:
                # Co-owned or merged identities can hold two teams in one year
                career.years.append(season.year)
                career.seasons_played += 1

            if season.champion_id == team.team_id:
                career.championships += 1
            if team.team_id in season.championship_participants:
                career.championship_appearances += 1
            if team.playoff_seed and team.playoff_seed <= playoff_team_count:
                career.playoff_appearances += 1

    logger.debug(f"Folded {len(ledger)} seasons into {len(careers)} career records")
    return careers


def careers_by_team(
    ledger: SeasonLedger,
    resolver: OwnerIdentityResolver,
    default_playoff_team_count: int = 6,
) -> Dict[AggregationKey, CareerRecord]:
    return fold_careers(
        ledger,
        lambda season, team: AggregationKey.team(team.team_id),
        resolver,
        default_playoff_team_count,
    )


def careers_by_owner(
    ledger: SeasonLedger,
    resolver: OwnerIdentityResolver,
    default_playoff_team_count: int = 6,
) -> Dict[AggregationKey, CareerRecord]:
    return fold_careers(
        ledger,
        lambda season, team: resolver.owner_key(season.year, team.team_id),
        resolver,
        default_playoff_team_count,
    )


def _ranked(
    records: List[CareerRecord], value: Callable[[CareerRecord], float]
) -> List[CareerRecord]:
    # Ties: points for desc, then display name asc
    return sorted(
        records,
        key=lambda r: (-value(r), -r.points_for, r.display_name, str(r.key)),
    )


def build_leaders(
    careers: Dict[AggregationKey, CareerRecord],
    min_games_for_win_pct: int = 1,
    min_games_for_ppg: int = 10,
) -> CareerLeaders:
    records = list(careers.values())
    return CareerLeaders(
        most_wins=_ranked(records, lambda r: r.wins),
        best_win_pct=_ranked(
            [r for r in records if r.games_played >= max(min_games_for_win_pct, 1)],
            lambda r: r.win_pct,
        ),
        most_championships=_ranked(records, lambda r: r.championships),
        most_championship_appearances=_ranked(
            records, lambda r: r.championship_appearances
        ),
        most_playoff_appearances=_ranked(records, lambda r: r.playoff_appearances),
        most_points_for=_ranked(records, lambda r: r.points_for),
        best_points_per_game=_ranked(
            [r for r in records if r.wins + r.losses >= min_games_for_ppg],
            lambda r: r.points_per_game,
        ),
    )
