"""Tests for configuration management."""

import pytest
from unittest.mock import patch

from roster_agent.config import BackendConfig, Config, ConfigManager


class TestConfigManager:
    """Test ConfigManager class."""

    def test_load_missing_config(self, tmp_path):
        manager = ConfigManager(config_dir=tmp_path)

        config = manager.load_config()

        assert config.team_id is None
        assert config.default_slot_capacity == 5

    def test_save_and_load(self, tmp_path):
        manager = ConfigManager(config_dir=tmp_path)

        manager.save_config(Config(team_id="t1", last_roster_id="r1", default_slot_capacity=9))
        config = manager.load_config()

        assert config.team_id == "t1"
        assert config.last_roster_id == "r1"
        assert config.default_slot_capacity == 9

    def test_invalid_config_uses_defaults(self, tmp_path):
        manager = ConfigManager(config_dir=tmp_path)
        manager.config_file.write_text("{broken")

        assert manager.load_config() == Config()


class TestBackendConfig:
    """Test BackendConfig class."""

    def test_validate_missing(self):
        with patch.object(BackendConfig, "SUPABASE_URL", ""), \
             patch.object(BackendConfig, "SUPABASE_KEY", ""):
            with pytest.raises(ValueError) as exc_info:
                BackendConfig.validate()

        assert "SUPABASE_URL" in str(exc_info.value)
        assert "SUPABASE_KEY" in str(exc_info.value)

    def test_rest_url(self):
        with patch.object(BackendConfig, "SUPABASE_URL", "https://demo.supabase.co/"):
            assert BackendConfig.rest_url() == "https://demo.supabase.co/rest/v1"
