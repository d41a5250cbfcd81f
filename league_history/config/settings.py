import logging
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment variables or .env file."""

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Season Selection
    min_year: Optional[int] = Field(
        None, description="Seasons before this year are left out of every view."
    )

    # Clutch Thresholds
    close_threshold: float = Field(
        5.0,
        ge=0,
        description="A matchup with margin <= this value is a close game.",
    )
    blowout_threshold: float = Field(
        30.0,
        ge=0,
        description="A matchup with margin > this value is a blowout.",
    )

    # Record Book Eligibility
    legacy_cutoff_year: int = Field(
        2015,
        description="Seasons at or before this year only count weeks up to legacy_week_limit.",
    )
    legacy_week_limit: int = Field(
        12, ge=1, description="Last eligible week for legacy seasons."
    )
    highlight_cutoff_year: int = Field(
        2017,
        description="Legacy cutoff used by the analytics highest-single-game highlight.",
    )
    record_book_depth: int = Field(
        10, ge=1, description="Number of entries kept in each record book list."
    )

    # Leaderboards
    default_playoff_team_count: int = Field(
        6, ge=1, description="Playoff field size when a season does not report one."
    )
    min_games_for_win_pct: int = Field(
        1, ge=1, description="Games required to enter the win percentage board."
    )
    min_games_for_ppg: int = Field(
        10, ge=1, description="Decided games required to enter the points-per-game board."
    )

    # Analytics
    min_consistency_games: int = Field(
        3, ge=1, description="Scores required before consistency is reported."
    )

    # Ownership
    co_owner_mappings: Dict[str, str] = Field(
        default_factory=dict,
        description="Raw owner id -> canonical owner id for shared teams.",
    )
    co_owner_display_names: Dict[str, str] = Field(
        default_factory=dict,
        description="Canonical owner id -> display name override.",
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_prefix="LEAGUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings(**overrides) -> EngineSettings:
    """Loads and validates engine settings."""
    try:
        settings = EngineSettings(**overrides)
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading engine settings: {e}")
        raise SystemExit("Failed to load engine settings. Exiting.")


_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """Returns the default settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
