"""
Configuration management for the data layer.
Handles loading site information and tracking options from a JSON file and
environment variables.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

from .models import DataLayerConfig, SiteInfo


@dataclass
class SiteConfig:
    """Site information settings."""
    name: str
    experience: str
    currency: str
    division: str
    domain: str
    env: str
    version: str


@dataclass
class TrackingConfig:
    """Tracking behaviour settings."""
    debug: bool
    nullify_default: list[str]
    identity_cookie: str
    session_cookie: str


# Environment variable -> site field
_SITE_ENV_VARS = {
    "DATALAYER_SITE_NAME": "name",
    "DATALAYER_EXPERIENCE": "experience",
    "DATALAYER_CURRENCY": "currency",
    "DATALAYER_DIVISION": "division",
    "DATALAYER_DOMAIN": "domain",
    "DATALAYER_ENV": "env",
    "DATALAYER_VERSION": "version",
}


class ConfigManager:
    """Manages data layer configuration loading and access."""

    def __init__(self, config_file: str = "datalayer_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        # Start with default config
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "site": {
                "name": "",
                "experience": "desktop",
                "currency": "AUD",
                "division": "",
                "domain": "",
                "env": "prod",
                "version": "1.0.0"
            },
            "tracking": {
                "debug": False,
                "nullify_default": ["error"],
                "identity_cookie": "uem_hashed",
                "session_cookie": "session_id"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        for env_var, field in _SITE_ENV_VARS.items():
            if os.getenv(env_var):
                self._config["site"][field] = os.getenv(env_var)

        if os.getenv("DATALAYER_DEBUG"):
            self._config["tracking"]["debug"] = os.getenv("DATALAYER_DEBUG").lower() == "true"

        if os.getenv("DATALAYER_NULLIFY_DEFAULT"):
            self._config["tracking"]["nullify_default"] = [
                name.strip() for name in os.getenv("DATALAYER_NULLIFY_DEFAULT").split(",") if name.strip()
            ]

    def get_site_config(self) -> SiteConfig:
        """Get site configuration."""
        site = self._config["site"]
        return SiteConfig(
            name=site["name"],
            experience=site["experience"],
            currency=site["currency"],
            division=site["division"],
            domain=site["domain"],
            env=site["env"],
            version=site["version"]
        )

    def get_tracking_config(self) -> TrackingConfig:
        """Get tracking configuration."""
        tracking = self._config["tracking"]
        return TrackingConfig(
            debug=tracking["debug"],
            nullify_default=list(tracking["nullify_default"]),
            identity_cookie=tracking["identity_cookie"],
            session_cookie=tracking["session_cookie"]
        )

    def get_data_layer_config(self) -> DataLayerConfig:
        """Build the options passed to ``init``.

        Site information is left out when no site name is configured, so that
        initialisation fails loudly instead of tracking an anonymous site.
        """
        site = self.get_site_config()
        tracking = self.get_tracking_config()
        site_info = SiteInfo(**site.__dict__) if site.name else None
        return DataLayerConfig(
            site_info=site_info,
            properties_to_nullify={"default": tracking.nullify_default}
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_site_config() -> SiteConfig:
    """Get site configuration."""
    return config_manager.get_site_config()


def get_tracking_config() -> TrackingConfig:
    """Get tracking configuration."""
    return config_manager.get_tracking_config()


def get_data_layer_config() -> DataLayerConfig:
    """Get the init options for the configured site."""
    return config_manager.get_data_layer_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()
