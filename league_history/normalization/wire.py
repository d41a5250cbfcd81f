"""Provider wire-shape adapters.

Raw season payloads changed shape across provider API eras. Every helper here
reads one raw field family and returns a plain canonical value, so nothing past
the normalizer ever inspects provider keys.

Team records:
    modern  {"record": {"overall": {"wins": .., "pointsFor": ..}}}
    legacy  {"record": {"wins": .., "pointsFor": ..}}  (points may sit on the team)
    flat    {"wins": .., "losses": .., "points": ..}

Schedule entries:
    modern  {"home": {"teamId": .., "totalPoints": ..}, "away": {...}}
    legacy  {"homeTeamId": .., "homeTeamScores": [..]} or {"homeScore": ..}
"""

from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from league_history.models.enums import PlayoffTier
from league_history.models.team import Member, TeamRecord


def as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        logger.debug(f"Could not parse value '{value}' as float")
        return None


def as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        logger.debug(f"Could not parse value '{value}' as int")
        return None


def _first_number(*values: Any) -> float:
    """First value that parses as a non-zero number, else 0.0."""
    for value in values:
        number = as_float(value)
        if number:
            return number
    return 0.0


def read_team_record(raw_team: Dict[str, Any]) -> TeamRecord:
    record = raw_team.get("record")
    if isinstance(record, dict) and isinstance(record.get("overall"), dict):
        overall = record["overall"]
        return TeamRecord(
            wins=as_int(overall.get("wins")) or 0,
            losses=as_int(overall.get("losses")) or 0,
            ties=as_int(overall.get("ties")) or 0,
            points_for=_first_number(overall.get("pointsFor")),
            points_against=_first_number(overall.get("pointsAgainst")),
        )
    if isinstance(record, dict):
        return TeamRecord(
            wins=as_int(record.get("wins")) or 0,
            losses=as_int(record.get("losses")) or 0,
            ties=as_int(record.get("ties")) or 0,
            points_for=_first_number(record.get("pointsFor"), raw_team.get("points")),
            points_against=_first_number(record.get("pointsAgainst")),
        )
    return TeamRecord(
        wins=as_int(raw_team.get("wins")) or 0,
        losses=as_int(raw_team.get("losses")) or 0,
        ties=as_int(raw_team.get("ties")) or 0,
        points_for=_first_number(raw_team.get("points"), raw_team.get("pointsFor")),
        points_against=_first_number(raw_team.get("pointsAgainst")),
    )


def read_team_name(raw_team: Dict[str, Any], team_id: int) -> str:
    name = raw_team.get("name")
    if name:
        return str(name).strip()
    location = raw_team.get("location")
    nickname = raw_team.get("nickname")
    if location or nickname:
        return f"{location or ''} {nickname or ''}".strip()
    if raw_team.get("teamName"):
        return str(raw_team["teamName"]).strip()
    return f"Team {team_id}"


def read_abbreviation(raw_team: Dict[str, Any], name: str, team_id: int) -> str:
    if raw_team.get("abbrev"):
        return str(raw_team["abbrev"])
    if name and name != f"Team {team_id}":
        return name[:4].upper()
    return f"T{team_id}"


def read_final_rank(raw_team: Dict[str, Any]) -> Optional[int]:
    for field in ("rankCalculatedFinal", "finalStandingsPosition"):
        rank = as_int(raw_team.get(field))
        if rank:
            return rank
    return None


def read_member(raw_member: Any) -> Optional[Member]:
    if not isinstance(raw_member, dict) or raw_member.get("id") is None:
        return None
    return Member(
        member_id=str(raw_member["id"]),
        first_name=raw_member.get("firstName"),
        last_name=raw_member.get("lastName"),
    )


def read_members(raw_members: Any) -> Tuple[Member, ...]:
    if not isinstance(raw_members, list):
        return ()
    members = (read_member(raw) for raw in raw_members)
    return tuple(member for member in members if member is not None)


def read_ownership(
    raw_team: Dict[str, Any],
) -> Tuple[Optional[str], Tuple[Member, ...], Tuple[Member, ...]]:
    """Returns (primary owner id, embedded owner records, embedded member records).

    Modern payloads list owners as bare id strings; older ones embed whole
    member records. Both are kept so the identity resolver can pick a source.
    """
    raw_owners = raw_team.get("owners") if isinstance(raw_team.get("owners"), list) else []
    owner_ids = [str(o) for o in raw_owners if isinstance(o, (str, int))]
    embedded_owners = read_members([o for o in raw_owners if isinstance(o, dict)])
    embedded_members = read_members(raw_team.get("members"))

    primary = raw_team.get("primaryOwner")
    primary_owner_id = str(primary) if primary else (owner_ids[0] if owner_ids else None)
    return primary_owner_id, embedded_owners, embedded_members


def read_playoff_tier(raw_matchup: Dict[str, Any]) -> Optional[PlayoffTier]:
    raw_tier = raw_matchup.get("playoffTierType")
    if not raw_tier:
        return None
    try:
        return PlayoffTier(str(raw_tier))
    except ValueError:
        return PlayoffTier.OTHER


def _side_score(side: Dict[str, Any]) -> float:
    roster = side.get("rosterForCurrentScoringPeriod")
    applied = roster.get("appliedStatTotal") if isinstance(roster, dict) else None
    return _first_number(side.get("totalPoints"), applied)


def read_matchup_sides(
    raw_matchup: Dict[str, Any],
) -> Tuple[Optional[int], float, Optional[int], float]:
    """Returns (home id, home score, away id, away score). Ids are None for byes."""
    home = raw_matchup.get("home")
    away = raw_matchup.get("away")
    if isinstance(home, dict) and isinstance(away, dict):
        return (
            as_int(home.get("teamId")),
            _side_score(home),
            as_int(away.get("teamId")),
            _side_score(away),
        )

    def legacy_score(prefix: str) -> float:
        scores = raw_matchup.get(f"{prefix}TeamScores")
        first = scores[0] if isinstance(scores, list) and scores else None
        return _first_number(first, raw_matchup.get(f"{prefix}Score"))

    home_id = as_int(raw_matchup.get("homeTeamId"))
    away_id = as_int(raw_matchup.get("awayTeamId"))
    if home_id is None and isinstance(home, dict):
        home_id = as_int(home.get("teamId"))
    if away_id is None and isinstance(away, dict):
        away_id = as_int(away.get("teamId"))
    return home_id, legacy_score("home"), away_id, legacy_score("away")


def read_settings(raw_settings: Any) -> Dict[str, Optional[Any]]:
    if not isinstance(raw_settings, dict):
        return {}
    schedule = raw_settings.get("scheduleSettings")
    schedule = schedule if isinstance(schedule, dict) else {}
    return {
        "league_name": raw_settings.get("name"),
        "league_size": as_int(raw_settings.get("size")),
        "playoff_team_count": as_int(schedule.get("playoffTeamCount")),
        "matchup_period_count": as_int(schedule.get("matchupPeriodCount")),
    }


def raw_list(payload: Dict[str, Any], field: str) -> List[Any]:
    value = payload.get(field)
    return value if isinstance(value, list) else []
