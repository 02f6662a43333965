"""
Configuration loading and validation for SQLite SQL Exporter.
"""

import os
import re
from typing import Any, Optional

import yaml

from .models import MissingColumnPolicy


class ConfigLoader:
    """Loads configuration from an optional YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file; no file means an empty config."""
        if self.config_path is None:
            return {}

        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Configuration file '{self.config_path}' must contain a mapping")

        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_export_settings(self) -> dict[str, Any]:
        """Get export settings."""
        return self.config.get('export') or {}

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.config.get('logging') or {}

    def get_missing_column_policy(self) -> MissingColumnPolicy:
        """Get the policy for rows lacking a value for a known column."""
        value = self.get_export_settings().get('missing_columns', MissingColumnPolicy.NULL.value)
        # A bare YAML null reads as None
        if value is None:
            return MissingColumnPolicy.NULL
        try:
            return MissingColumnPolicy(str(value).lower())
        except ValueError:
            allowed = ', '.join(p.value for p in MissingColumnPolicy)
            raise ValueError(
                f"Invalid export.missing_columns '{value}' (expected one of: {allowed})"
            ) from None
