"""
Test cases for the data layer configuration manager.
Tests defaults, file loading, environment overrides and init options.
"""

import json
import os
from unittest.mock import patch

import pytest

from datalayer.config_manager import ConfigManager, SiteConfig, TrackingConfig
from datalayer.models import DataLayerConfig


@pytest.fixture
def config_file(tmp_path):
    """Path to a config file that does not exist yet."""
    return tmp_path / "datalayer_config.json"


class TestConfigManager:
    """Test the ConfigManager class functionality."""

    def test_defaults_without_file(self, config_file):
        """Test default configuration when the file doesn't exist."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        site = manager.get_site_config()
        tracking = manager.get_tracking_config()

        assert isinstance(site, SiteConfig)
        assert site.name == ""
        assert site.currency == "AUD"
        assert site.env == "prod"
        assert isinstance(tracking, TrackingConfig)
        assert tracking.debug is False
        assert tracking.nullify_default == ["error"]
        assert tracking.identity_cookie == "uem_hashed"

    def test_load_config_from_file(self, config_file):
        """Test loading configuration from an existing file."""
        config_file.write_text(json.dumps({
            "site": {"name": "my-site", "domain": "www.my-site.com.au"},
            "tracking": {"session_cookie": "sid"},
        }))

        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        assert manager.get_site_config().name == "my-site"
        assert manager.get_site_config().domain == "www.my-site.com.au"
        # Unspecified keys keep their defaults
        assert manager.get_site_config().experience == "desktop"
        assert manager.get_tracking_config().session_cookie == "sid"
        assert manager.get_tracking_config().identity_cookie == "uem_hashed"

    def test_invalid_file_falls_back_to_defaults(self, config_file):
        """Test that a malformed file is ignored."""
        config_file.write_text("{not json")

        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        assert manager.get_site_config().name == ""

    def test_override_with_env_variables(self, config_file):
        """Test that environment variables override config file values."""
        config_file.write_text(json.dumps({"site": {"name": "file-site", "env": "dev"}}))
        env_vars = {
            "DATALAYER_SITE_NAME": "env-site",
            "DATALAYER_CURRENCY": "NZD",
            "DATALAYER_DEBUG": "true",
            "DATALAYER_NULLIFY_DEFAULT": "error, search ,",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            manager = ConfigManager(str(config_file))

        assert manager.get_site_config().name == "env-site"
        assert manager.get_site_config().currency == "NZD"
        assert manager.get_site_config().env == "dev"
        assert manager.get_tracking_config().debug is True
        assert manager.get_tracking_config().nullify_default == ["error", "search"]

    def test_get_data_layer_config(self, config_file):
        """Test building init options from the configured site."""
        config_file.write_text(json.dumps({"site": {"name": "my-site", "division": "d"}}))

        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        config = manager.get_data_layer_config()

        assert isinstance(config, DataLayerConfig)
        assert config.site_info.name == "my-site"
        assert config.site_info.division == "d"
        assert config.properties_to_nullify == {"default": ["error"]}

    def test_data_layer_config_without_site_name(self, config_file):
        """Test that no site information is produced for an unnamed site."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        assert manager.get_data_layer_config().site_info is None

    def test_save_and_reload(self, config_file):
        """Test saving configuration and reloading it from disk."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))
            manager._config["site"]["name"] = "saved-site"
            manager.save_config()

            saved = json.loads(config_file.read_text())
            assert saved["site"]["name"] == "saved-site"

            config_file.write_text(json.dumps({"site": {"name": "edited"}}))
            manager.reload()

        assert manager.get_site_config().name == "edited"

    def test_get_config_returns_copy(self, config_file):
        """Test that the raw config copy does not replace sections."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        raw = manager.get_config()
        raw["site"] = {}

        assert manager.get_site_config().currency == "AUD"


class TestGlobalFunctions:
    """Test the module-level accessors."""

    def test_accessors_use_global_manager(self, config_file):
        """Test that accessors delegate to the global config manager."""
        config_file.write_text(json.dumps({"site": {"name": "global-site"}}))

        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        with patch("datalayer.config_manager.config_manager", manager):
            from datalayer.config_manager import (
                get_data_layer_config,
                get_site_config,
                get_tracking_config,
            )

            assert get_site_config().name == "global-site"
            assert get_tracking_config().nullify_default == ["error"]
            assert get_data_layer_config().site_info.name == "global-site"

    def test_reload_config(self, config_file):
        """Test that reload_config re-reads the global manager's file."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

            with patch("datalayer.config_manager.config_manager", manager):
                from datalayer.config_manager import get_site_config, reload_config

                config_file.write_text(json.dumps({"site": {"name": "late-site"}}))
                reload_config()

                assert get_site_config().name == "late-site"
