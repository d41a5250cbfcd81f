# league_history/utils/misc_utils.py
import math
from typing import Optional, Sequence, Tuple


def format_owner_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """Formats a member name as "First L." (capitalized first name, last initial)."""
    first = first_name.strip() if first_name else ""
    last = last_name.strip() if last_name else ""
    first = first[:1].upper() + first[1:].lower() if first else ""
    last_initial = last[:1].upper() + "." if last else ""
    return f"{first} {last_initial}".strip()


def canonical_pair(team_a: int, team_b: int) -> Tuple[int, int]:
    """Orders two team ids low/high so a pair has exactly one key."""
    return (team_a, team_b) if team_a <= team_b else (team_b, team_a)


def safe_pct(numerator: float, denominator: float) -> float:
    """Percentage on a 0-100 scale, 0.0 when the denominator is empty."""
    if not denominator:
        return 0.0
    return numerator / denominator * 100


def index_percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """Index-based percentile, sorted_values[floor(n * fraction)]; no interpolation."""
    index = min(int(math.floor(len(sorted_values) * fraction)), len(sorted_values) - 1)
    return sorted_values[index]
