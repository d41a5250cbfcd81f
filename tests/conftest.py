"""
League History - Test Configuration
Payload builders and shared fixtures for the test suite.
"""

from typing import Any, Dict, List, Optional

import pytest

from league_history.analytics.context import AnalyticsContext
from league_history.config.settings import EngineSettings
from league_history.identity.resolver import OwnerIdentityResolver
from league_history.normalization.normalizer import SeasonNormalizer

ALICE = "{AAAA0000-0000-0000-0000-00000000AAAA}"
BOB = "{BBBB0000-0000-0000-0000-00000000BBBB}"
CARA = "{CCCC0000-0000-0000-0000-00000000CCCC}"
DAN = "{DDDD0000-0000-0000-0000-00000000DDDD}"
EVE = "{EEEE0000-0000-0000-0000-00000000EEEE}"


def build_member(member_id: str, first: str, last: str) -> Dict[str, Any]:
    return {"id": member_id, "firstName": first, "lastName": last}


def build_team(
    team_id: int,
    owner: Optional[str] = None,
    wins: int = 0,
    losses: int = 0,
    ties: int = 0,
    points_for: float = 0.0,
    points_against: float = 0.0,
    rank: Optional[int] = None,
    seed: Optional[int] = None,
    name: Optional[str] = None,
) -> Dict[str, Any]:
    """Team in the modern provider shape (record.overall, owners as id strings)."""
    team: Dict[str, Any] = {
        "id": team_id,
        "name": name or f"Squad {team_id}",
        "record": {
            "overall": {
                "wins": wins,
                "losses": losses,
                "ties": ties,
                "pointsFor": points_for,
                "pointsAgainst": points_against,
            }
        },
    }
    if owner:
        team["primaryOwner"] = owner
        team["owners"] = [owner]
    if rank is not None:
        team["rankCalculatedFinal"] = rank
    if seed is not None:
        team["playoffSeed"] = seed
    return team


def build_game(
    week: int,
    home_id: int,
    home_score: float,
    away_id: int,
    away_score: float,
    tier: Optional[str] = None,
) -> Dict[str, Any]:
    """Schedule entry in the modern provider shape."""
    game: Dict[str, Any] = {
        "matchupPeriodId": week,
        "home": {"teamId": home_id, "totalPoints": home_score},
        "away": {"teamId": away_id, "totalPoints": away_score},
    }
    if tier is not None:
        game["playoffTierType"] = tier
    return game


def build_payload(
    teams: List[Dict[str, Any]],
    schedule: Optional[List[Dict[str, Any]]] = None,
    members: Optional[List[Dict[str, Any]]] = None,
    regular_season_weeks: Optional[int] = None,
    playoff_team_count: Optional[int] = None,
) -> Dict[str, Any]:
    schedule_settings: Dict[str, Any] = {}
    if regular_season_weeks is not None:
        schedule_settings["matchupPeriodCount"] = regular_season_weeks
    if playoff_team_count is not None:
        schedule_settings["playoffTeamCount"] = playoff_team_count
    return {
        "teams": teams,
        "schedule": schedule or [],
        "members": members or [],
        "settings": {
            "name": "Test League",
            "size": len(teams),
            "scheduleSettings": schedule_settings,
        },
    }


@pytest.fixture
def make_member():
    return build_member


@pytest.fixture
def make_team():
    return build_team


@pytest.fixture
def make_game():
    return build_game


@pytest.fixture
def make_payload():
    return build_payload


@pytest.fixture
def settings() -> EngineSettings:
    """Default engine settings, isolated from any local .env file."""
    return EngineSettings(_env_file=None)


@pytest.fixture
def league_payloads() -> Dict[int, Dict[str, Any]]:
    """Two seasons of a four-team league.

    2022: Dan owns team 4; team 1 finishes rank 1 and wins the final.
    2023: Eve takes over team 4; no final ranks, team 2 wins the bracket final.
    Weeks 1-3 are regular season, week 4 is the final.
    """
    members_2022 = [
        build_member(ALICE, "alice", "smith"),
        build_member(BOB, "Bob", "Jones"),
        build_member(CARA, "Cara", "Lee"),
        build_member(DAN, "Dan", "Ross"),
    ]
    season_2022 = build_payload(
        teams=[
            build_team(1, ALICE, 2, 0, 1, 330.0, 305.0, rank=1, seed=1),
            build_team(2, BOB, 1, 2, 0, 318.0, 299.0, rank=2, seed=2),
            build_team(3, CARA, 1, 2, 0, 294.0, 293.0, rank=4, seed=4),
            build_team(4, DAN, 1, 1, 1, 275.0, 320.0, rank=3, seed=3),
        ],
        schedule=[
            build_game(1, 1, 120.0, 2, 100.0, "NONE"),
            build_game(1, 3, 90.0, 4, 95.0, "NONE"),
            build_game(2, 1, 110.0, 3, 105.0, "NONE"),
            build_game(2, 2, 130.0, 4, 80.0, "NONE"),
            build_game(3, 1, 100.0, 4, 100.0, "NONE"),
            build_game(3, 2, 88.0, 3, 99.0, "NONE"),
            build_game(4, 1, 115.0, 2, 112.0, "WINNERS_BRACKET"),
        ],
        members=members_2022,
        regular_season_weeks=3,
        playoff_team_count=2,
    )

    members_2023 = [
        build_member(ALICE, "Alice", "Smith"),
        build_member(BOB, "Bob", "Jones"),
        build_member(CARA, "Cara", "Lee"),
        build_member(EVE, "Eve", "Park"),
    ]
    season_2023 = build_payload(
        teams=[
            build_team(1, ALICE, 2, 1, 0, 289.0, 295.0, seed=2),
            build_team(2, BOB, 2, 1, 0, 315.0, 318.0, seed=1),
            build_team(3, CARA, 1, 2, 0, 358.0, 323.0, seed=3),
            build_team(4, EVE, 1, 2, 0, 306.0, 332.0, seed=4),
        ],
        schedule=[
            build_game(1, 1, 90.0, 2, 100.0),
            build_game(1, 3, 140.0, 4, 101.0),
            build_game(2, 1, 102.0, 3, 100.0),
            build_game(2, 2, 95.0, 4, 110.0),
            build_game(3, 1, 97.0, 4, 95.0),
            build_game(3, 2, 120.0, 3, 118.0),
            build_game(4, 3, 105.0, 2, 125.0, "WINNERS_BRACKET"),
        ],
        members=members_2023,
        regular_season_weeks=3,
        playoff_team_count=2,
    )

    return {2022: season_2022, "2023": season_2023}


@pytest.fixture
def ledger(league_payloads):
    return SeasonNormalizer().normalize(league_payloads)


@pytest.fixture
def resolver(ledger):
    return OwnerIdentityResolver(ledger)


@pytest.fixture
def analytics_ctx(ledger, resolver):
    return AnalyticsContext(ledger, resolver)
