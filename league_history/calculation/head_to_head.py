from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from league_history.identity.resolver import OwnerIdentityResolver
from league_history.models.h2h import H2HCell, H2HDetail, H2HGame, H2HRecord, H2HSide
from league_history.models.matchup import Matchup
from league_history.utils.misc_utils import canonical_pair


class H2HMatrix:
    """Head-to-head records for every team pair, keyed low id / high id."""

    def __init__(self, records: Dict[Tuple[int, int], H2HRecord], team_ids: Iterable[int], resolver: OwnerIdentityResolver):
        self.records = records
        self.team_ids = sorted(set(team_ids))
        self.resolver = resolver

    @classmethod
    def build(
        cls,
        matchups: List[Matchup],
        resolver: OwnerIdentityResolver,
        team_ids: Optional[Iterable[int]] = None,
    ) -> "H2HMatrix":
        records: Dict[Tuple[int, int], H2HRecord] = {}
        seen_ids = set()

        for m in sorted(matchups, key=lambda m: (m.year, m.week)):
            low, high = canonical_pair(m.home_team_id, m.away_team_id)
            seen_ids.update((low, high))
            record = records.get((low, high))
            if record is None:
                record = records[(low, high)] = H2HRecord(team1=low, team2=high)

            if m.winner_id is None:
                record.ties += 1
            elif m.winner_id == low:
                record.team1_wins += 1
            else:
                record.team2_wins += 1

            record.matchups.append(
                H2HGame(
                    year=m.year,
                    week=m.week,
                    team1_score=m.score_for(low),
                    team2_score=m.score_for(high),
                    is_playoff=m.is_playoff,
                )
            )

        logger.debug(f"Built {len(records)} head-to-head pair records")
        return cls(records, team_ids if team_ids is not None else seen_ids, resolver)

    def record(self, team_a: int, team_b: int) -> Optional[H2HRecord]:
        return self.records.get(canonical_pair(team_a, team_b))

    def cell(self, team_a: int, team_b: int) -> H2HCell:
        """Record of team_a against team_b."""
        record = self.record(team_a, team_b)
        if record is None:
            return H2HCell()
        if team_a == record.team1:
            return H2HCell(wins=record.team1_wins, losses=record.team2_wins, ties=record.ties)
        return H2HCell(wins=record.team2_wins, losses=record.team1_wins, ties=record.ties)

    def matrix(self) -> Dict[int, Dict[int, Optional[H2HCell]]]:
        """Team x team grid; the diagonal is None."""
        return {
            row: {
                col: None if row == col else self.cell(row, col)
                for col in self.team_ids
            }
            for row in self.team_ids
        }

    def detail(self, team_a: int, team_b: int) -> H2HDetail:
        """Head-to-head view oriented so team1 is team_a, whichever id is lower."""
        record = self.record(team_a, team_b)
        cell = self.cell(team_a, team_b)
        games: List[H2HGame] = []
        if record is not None:
            flipped = team_a != record.team1
            games = [
                H2HGame(
                    year=g.year,
                    week=g.week,
                    team1_score=g.team2_score if flipped else g.team1_score,
                    team2_score=g.team1_score if flipped else g.team2_score,
                    is_playoff=g.is_playoff,
                )
                for g in record.matchups
            ]
        return H2HDetail(
            team1=H2HSide(team_id=team_a, name=self.resolver.team_display_name(team_a), wins=cell.wins),
            team2=H2HSide(team_id=team_b, name=self.resolver.team_display_name(team_b), wins=cell.losses),
            ties=cell.ties,
            matchups=games,
        )
