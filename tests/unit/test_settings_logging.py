"""
Unit Tests for Settings and Logging
===================================
Tests for environment-driven settings and log record masking.
"""

import logging

import pytest
from loguru import logger

from league_history.config.settings import EngineSettings, load_settings
from league_history.logging.setup import mask_member_id, member_id_filter, setup_logging


class TestEngineSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, settings):
        """Test documented defaults."""
        assert settings.log_level == "INFO"
        assert settings.min_year is None
        assert (settings.close_threshold, settings.blowout_threshold) == (5.0, 30.0)
        assert (settings.legacy_cutoff_year, settings.legacy_week_limit) == (2015, 12)
        assert settings.highlight_cutoff_year == 2017
        assert settings.record_book_depth == 10
        assert settings.default_playoff_team_count == 6
        assert (settings.min_games_for_win_pct, settings.min_games_for_ppg) == (1, 10)
        assert settings.min_consistency_games == 3
        assert settings.co_owner_mappings == {}

    def test_environment_overrides(self, monkeypatch):
        """Test LEAGUE_ prefixed variables are read, including JSON tables."""
        monkeypatch.setenv("LEAGUE_CLOSE_THRESHOLD", "7.5")
        monkeypatch.setenv("LEAGUE_MIN_YEAR", "2012")
        monkeypatch.setenv("LEAGUE_CO_OWNER_MAPPINGS", '{"{A}": "{B}"}')
        settings = EngineSettings(_env_file=None)
        assert settings.close_threshold == 7.5
        assert settings.min_year == 2012
        assert settings.co_owner_mappings == {"{A}": "{B}"}

    def test_log_level_normalized(self):
        """Test log levels are upper-cased and invalid ones fall back to INFO."""
        assert load_settings(log_level="debug").log_level == "DEBUG"
        assert load_settings(log_level="chatty").log_level == "INFO"

    def test_invalid_settings_exit(self):
        """Test validation failures stop the process."""
        with pytest.raises(SystemExit):
            load_settings(close_threshold=-1)


class TestMemberIdMasking:
    """Test member id masking in log output."""

    def test_mask_member_id(self):
        """Test provider ids keep only their first and last four characters."""
        masked = mask_member_id("owner {961895BA-00CF-4DC9-8A38-61A2924B6643} joined")
        assert masked == "owner {9618****6643} joined"

    def test_other_text_untouched(self):
        """Test text without member ids is unchanged."""
        assert mask_member_id("team 7 scored {120}") == "team 7 scored {120}"

    def test_filter_masks_message_and_extra(self):
        """Test the record filter masks the message and string extras."""
        record = {
            "message": "resolved {961895BA-00CF-4DC9-8A38-61A2924B6643}",
            "extra": {"owner": "{AAAA0000-0000-0000-0000-00000000AAAA}", "year": 2022},
        }
        assert member_id_filter(record) is True
        assert record["message"] == "resolved {9618****6643}"
        assert record["extra"]["owner"] == "{AAAA****AAAA}"
        assert record["extra"]["year"] == 2022


class TestSetupLogging:
    """Test logger configuration."""

    def test_setup_intercepts_standard_logging(self):
        """Test stdlib logging is routed through loguru after setup."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        messages = []
        try:
            setup_logging("debug")
            sink_id = logger.add(messages.append, format="{message}", level="DEBUG")
            logging.getLogger("league_history.test").warning("owner {961895BA-00CF-4DC9-8A38-61A2924B6643}")
            logger.remove(sink_id)
            assert [type(h).__name__ for h in root.handlers] == ["InterceptHandler"]
            assert any("owner {9618" in str(m) for m in messages)
        finally:
            logger.remove()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
