from enum import Enum


class KeyKind(str, Enum):
    TEAM = "TEAM"
    OWNER = "OWNER"
    PSEUDO = "PSEUDO"  # Team with no resolvable owner


class Outcome(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"
    TIE = "TIE"


class StreakType(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"


class PlayoffTier(str, Enum):
    NONE = "NONE"
    WINNERS_BRACKET = "WINNERS_BRACKET"
    WINNERS_CONSOLATION_LADDER = "WINNERS_CONSOLATION_LADDER"
    LOSERS_CONSOLATION_LADDER = "LOSERS_CONSOLATION_LADDER"
    OTHER = "OTHER"  # Any marker the provider adds later


class ChampionSource(str, Enum):
    RANK = "RANK"  # Final rank 1
    BRACKET = "BRACKET"  # Winners-bracket final
    RECORD = "RECORD"  # Best record fallback
    NONE = "NONE"
