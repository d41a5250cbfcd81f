from typing import Any, Dict, List, Mapping, Optional, Tuple

from loguru import logger

from league_history.models.enums import ChampionSource, PlayoffTier
from league_history.models.matchup import Matchup
from league_history.models.season import Season, SeasonLedger, SeasonSettings
from league_history.models.team import Team
from league_history.normalization import wire

# Regular-season length by era when a payload does not report one
LEGACY_REGULAR_SEASON_WEEKS = 13
MODERN_REGULAR_SEASON_WEEKS = 14
LAST_LEGACY_SCHEDULE_YEAR = 2020


class NormalizationError(Exception):
    """Custom exception for season normalization errors."""

    pass


class MalformedPayloadError(NormalizationError):
    """Raised when a season payload cannot be normalized at all (e.g. no team list)."""

    def __init__(self, year: int, reason: str):
        self.year = year
        self.reason = reason
        super().__init__(f"Season {year}: {reason}")


def default_regular_season_weeks(year: int) -> int:
    if year <= LAST_LEGACY_SCHEDULE_YEAR:
        return LEGACY_REGULAR_SEASON_WEEKS
    return MODERN_REGULAR_SEASON_WEEKS


class SeasonNormalizer:
    """Turns raw per-year provider payloads into canonical Season records."""

    def __init__(self, min_year: Optional[int] = None):
        self.min_year = min_year
        logger.debug(f"SeasonNormalizer initialized (min_year={min_year}).")

    def normalize(self, payloads: Mapping[Any, Mapping[str, Any]]) -> SeasonLedger:
        """Normalizes every usable year into a chronologically ordered ledger.

        Args:
            payloads: Year (int or numeric str) -> raw provider payload, or
                      {"error": "..."} for years the provider could not supply.

        Returns:
            A SeasonLedger holding one Season per usable year. Years with an
            error marker, a malformed payload or an unparsable key are skipped.
        """
        ledger = SeasonLedger()
        years: List[Tuple[int, Mapping[str, Any]]] = []

        for raw_year, payload in payloads.items():
            try:
                years.append((int(raw_year), payload))
            except (ValueError, TypeError):
                logger.warning(f"Skipping payload with non-numeric year key: {raw_year!r}")

        logger.info(f"Starting normalization for {len(years)} season payload(s)")

        for year, payload in sorted(years, key=lambda item: item[0]):
            if self.min_year is not None and year < self.min_year:
                logger.debug(f"Skipping {year}: before minimum year {self.min_year}")
                continue
            if isinstance(payload, Mapping) and payload.get("error"):
                logger.warning(f"Skipping {year}: provider error '{payload['error']}'")
                continue
            try:
                ledger.add(self.normalize_season(year, payload))
            except NormalizationError as e:
                logger.warning(f"Skipping {year}: {e}")
                continue
            except Exception as e:
                logger.exception(f"Unexpected error normalizing season {year}: {e}")
                continue

        logger.info(
            f"Normalization complete. Produced {len(ledger)} season(s): {ledger.years()}"
        )
        return ledger

    def normalize_season(self, year: int, payload: Mapping[str, Any]) -> Season:
        if not isinstance(payload, Mapping):
            raise MalformedPayloadError(year, "payload is not a mapping")
        if not isinstance(payload.get("teams"), list):
            raise MalformedPayloadError(year, "payload has no team list")

        payload = dict(payload)
        teams = self._parse_teams(year, wire.raw_list(payload, "teams"))
        raw_settings = wire.read_settings(payload.get("settings"))
        settings = SeasonSettings(
            regular_season_weeks=raw_settings.get("matchup_period_count")
            or default_regular_season_weeks(year),
            playoff_team_count=raw_settings.get("playoff_team_count"),
            league_name=raw_settings.get("league_name"),
            league_size=raw_settings.get("league_size"),
        )
        matchups = self._parse_matchups(
            year,
            wire.raw_list(payload, "schedule"),
            {team.team_id for team in teams},
            settings.regular_season_weeks,
        )
        champion_id, source = self._resolve_champion(teams, matchups)
        participants = self._resolve_championship_participants(
            teams, matchups, champion_id
        )

        logger.debug(
            f"Normalized {year}: {len(teams)} teams, {len(matchups)} matchups, "
            f"champion={champion_id} ({source.value})"
        )
        return Season(
            year=year,
            teams=tuple(teams),
            matchups=tuple(matchups),
            members=wire.read_members(payload.get("members")),
            settings=settings,
            champion_id=champion_id,
            champion_source=source,
            championship_participants=participants,
        )

    def _parse_teams(self, year: int, raw_teams: List[Any]) -> List[Team]:
        teams: List[Team] = []
        seen_ids = set()
        for raw_team in raw_teams:
            if not isinstance(raw_team, dict):
                logger.warning(f"{year}: skipping non-dictionary team entry: {type(raw_team)}")
                continue
            team_id = wire.as_int(raw_team.get("id"))
            if team_id is None:
                logger.warning(f"{year}: skipping team without an id: {raw_team.get('name')}")
                continue
            if team_id in seen_ids:
                logger.warning(f"{year}: duplicate team id {team_id}, keeping the first")
                continue
            seen_ids.add(team_id)

            name = wire.read_team_name(raw_team, team_id)
            primary_owner_id, embedded_owners, embedded_members = wire.read_ownership(
                raw_team
            )
            teams.append(
                Team(
                    team_id=team_id,
                    year=year,
                    name=name,
                    abbreviation=wire.read_abbreviation(raw_team, name, team_id),
                    primary_owner_id=primary_owner_id,
                    embedded_owners=embedded_owners,
                    embedded_members=embedded_members,
                    record=wire.read_team_record(raw_team),
                    final_rank=wire.read_final_rank(raw_team),
                    playoff_seed=wire.as_int(raw_team.get("playoffSeed")),
                )
            )
        return teams

    def _parse_matchups(
        self,
        year: int,
        raw_schedule: List[Any],
        team_ids: set,
        regular_season_weeks: int,
    ) -> List[Matchup]:
        matchups: List[Matchup] = []
        for raw_matchup in raw_schedule:
            if not isinstance(raw_matchup, dict):
                continue
            home_id, home_score, away_id, away_score = wire.read_matchup_sides(raw_matchup)
            if home_id is None or away_id is None:
                continue  # Bye week
            week = wire.as_int(raw_matchup.get("matchupPeriodId"))
            if week is None:
                logger.warning(f"{year}: skipping matchup without a week: {home_id} v {away_id}")
                continue
            if home_id not in team_ids or away_id not in team_ids:
                logger.warning(
                    f"{year} week {week}: matchup {home_id} v {away_id} references an unknown team, skipping"
                )
                continue

            tier = wire.read_playoff_tier(raw_matchup)
            if tier is not None and tier != PlayoffTier.NONE:
                is_playoff = True
            else:
                is_playoff = week > regular_season_weeks

            matchups.append(
                Matchup(
                    year=year,
                    week=week,
                    is_playoff=is_playoff,
                    playoff_tier=tier,
                    home_team_id=home_id,
                    away_team_id=away_id,
                    home_score=home_score,
                    away_score=away_score,
                )
            )
        return matchups

    @staticmethod
    def _winners_bracket_final(matchups: List[Matchup]) -> Optional[Matchup]:
        bracket = [m for m in matchups if m.playoff_tier == PlayoffTier.WINNERS_BRACKET]
        if not bracket:
            return None
        last_week = max(m.week for m in bracket)
        # First listed game of the final week, in schedule order
        return next(m for m in bracket if m.week == last_week)

    def _resolve_champion(
        self, teams: List[Team], matchups: List[Matchup]
    ) -> Tuple[Optional[int], ChampionSource]:
        by_rank = next((t for t in teams if t.final_rank == 1), None)
        if by_rank is not None:
            return by_rank.team_id, ChampionSource.RANK

        final = self._winners_bracket_final(matchups)
        if final is not None and final.winner_id is not None:
            return final.winner_id, ChampionSource.BRACKET

        if teams:
            best = min(
                teams,
                key=lambda t: (
                    -t.win_loss_margin,
                    t.playoff_seed if t.playoff_seed else float("inf"),
                    t.team_id,
                ),
            )
            return best.team_id, ChampionSource.RECORD

        return None, ChampionSource.NONE

    def _resolve_championship_participants(
        self,
        teams: List[Team],
        matchups: List[Matchup],
        champion_id: Optional[int],
    ) -> Tuple[int, ...]:
        final = self._winners_bracket_final(matchups)
        if final is not None:
            return (final.home_team_id, final.away_team_id)
        if champion_id is None:
            return ()
        runner_up = next(
            (t for t in teams if t.final_rank == 2 and t.team_id != champion_id), None
        )
        if runner_up is not None:
            return (champion_id, runner_up.team_id)
        return (champion_id,)
