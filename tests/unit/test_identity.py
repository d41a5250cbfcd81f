"""
Unit Tests for Owner Identity Resolution
========================================
Tests for owner sources, co-owner merging, current owners and display names.
"""

import pytest

from conftest import ALICE, BOB, CARA, DAN, EVE
from league_history.identity.resolver import UNKNOWN_OWNER, OwnerIdentityResolver
from league_history.models.owner import AggregationKey
from league_history.normalization.normalizer import SeasonNormalizer


@pytest.fixture
def mixed_source_resolver(make_team, make_member, make_payload):
    """One season where every team's owner comes from a different source."""
    payload = make_payload(
        [
            make_team(1, ALICE),
            {"id": 2, "name": "Squad 2", "owners": [{"id": "{O2}", "firstName": "Olga", "lastName": "Two"}]},
            {"id": 3, "name": "Squad 3", "members": [{"id": "{M3}", "firstName": "Mia", "lastName": "Three"}]},
            {"id": 4, "name": "Squad 4", "primaryOwner": "{P4}"},
            {"id": 5, "name": "Squad 5"},
        ],
        members=[make_member(ALICE, "Alice", "Smith")],
    )
    ledger = SeasonNormalizer().normalize({2024: payload})
    return OwnerIdentityResolver(ledger)


class TestOwnerSources:
    """Test the order owner ids are read in."""

    def test_each_source(self, mixed_source_resolver):
        """Test roster, embedded owner, embedded member, bare id and pseudo fallbacks."""
        r = mixed_source_resolver
        assert r.owner_key(2024, 1) == AggregationKey.owner(ALICE)
        assert r.owner_key(2024, 2) == AggregationKey.owner("{O2}")
        assert r.owner_key(2024, 3) == AggregationKey.owner("{M3}")
        assert r.owner_key(2024, 4) == AggregationKey.owner("{P4}")
        assert r.owner_key(2024, 5) == AggregationKey.pseudo(5)

    def test_embedded_names(self, mixed_source_resolver):
        """Test names on embedded records are used when the roster lacks them."""
        assert mixed_source_resolver.owner_display_name("{O2}") == "Olga T."
        assert mixed_source_resolver.owner_display_name("{M3}") == "Mia T."

    def test_unknown_owner_name(self, mixed_source_resolver):
        """Test an owner id without any name."""
        r = mixed_source_resolver
        assert r.owner_display_name("{P4}") == UNKNOWN_OWNER
        assert r.team_display_name(4) == "Squad 4"

    def test_pseudo_identity(self, mixed_source_resolver):
        """Test an ownerless team is shown by its team name and counts as current."""
        r = mixed_source_resolver
        key = AggregationKey.pseudo(5)
        assert key.is_pseudo
        assert r.display_name(key) == "Squad 5"
        assert r.is_current(key)
        assert str(key) == "team-5"

    def test_unseen_team_is_pseudo(self, mixed_source_resolver):
        """Test a team id with no season entry resolves to a pseudo key."""
        assert mixed_source_resolver.owner_key(2024, 99) == AggregationKey.pseudo(99)


class TestCurrentOwners:
    """Test current-owner detection on the shared league."""

    def test_current_keys(self, resolver):
        """Test owners of the most recent season are current."""
        assert resolver.current_keys == {
            AggregationKey.owner(ALICE),
            AggregationKey.owner(BOB),
            AggregationKey.owner(CARA),
            AggregationKey.owner(EVE),
        }
        assert not resolver.is_current(AggregationKey.owner(DAN))

    def test_team_keys_are_never_current(self, resolver):
        """Test team keys are not owner identities."""
        assert not resolver.is_current(AggregationKey.team(1))

    def test_owner_change_between_seasons(self, resolver):
        """Test the same team id maps to different owners by year."""
        assert resolver.owner_key(2022, 4) == AggregationKey.owner(DAN)
        assert resolver.owner_key(2023, 4) == AggregationKey.owner(EVE)

    def test_owners_list(self, resolver):
        """Test owners are sorted by name with current flags and season spans."""
        owners = resolver.owners()
        assert [o.display_name for o in owners] == ["Alice S.", "Bob J.", "Cara L.", "Dan R.", "Eve P."]
        dan = owners[3]
        assert not dan.is_current
        assert (dan.first_season, dan.last_season) == (2022, 2022)
        assert owners[0].is_current
        assert (owners[0].first_season, owners[0].last_season) == (2022, 2023)


class TestDisplayNames:
    """Test display name resolution."""

    def test_member_name_formatting(self, resolver):
        """Test first-seen roster names are formatted as First L."""
        assert resolver.owner_display_name(ALICE) == "Alice S."

    def test_team_display_name_uses_latest_owner(self, resolver):
        """Test team names follow the most recent owner of the team id."""
        assert resolver.team_display_name(4) == "Eve P."
        assert resolver.team_display_name(42) == "Team 42"

    def test_team_label(self, resolver):
        """Test single-season labels name the owner of that season."""
        assert resolver.team_label(2022, 4) == "Squad 4 (Dan R.)"
        assert resolver.display_name(AggregationKey.team(4), 2023) == "Squad 4 (Eve P.)"
        assert resolver.display_name(AggregationKey.team(4)) == "Eve P."


class TestCoOwnerMerging:
    """Test co-owner mappings and display overrides."""

    def test_merged_identity(self, ledger):
        """Test two raw ids fold into one canonical owner."""
        r = OwnerIdentityResolver(
            ledger,
            co_owner_mappings={EVE: DAN},
            co_owner_display_names={DAN: "Dan & Eve"},
        )
        assert r.owner_key(2023, 4) == AggregationKey.owner(DAN)
        assert r.owner_key(2022, 4) == AggregationKey.owner(DAN)
        assert r.is_current(AggregationKey.owner(DAN))
        assert r.is_current(AggregationKey.owner(EVE))
        assert r.owner_display_name(EVE) == "Dan & Eve"

        owners = {o.owner_id: o for o in r.owners()}
        assert set(owners) == {ALICE, BOB, CARA, DAN}
        assert owners[DAN].is_current
        assert (owners[DAN].first_season, owners[DAN].last_season) == (2022, 2023)
