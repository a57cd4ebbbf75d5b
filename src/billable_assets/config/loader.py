"""
Configuration Loader - Layered YAML and Environment Configuration.

A configuration is built from up to three layers, later layers winning:

    1. Base YAML file
    2. Profile file: <config_dir>/profiles/<name>.yaml
    3. Environment variables (see ENV_OVERRIDES)

The merged mapping is validated once, as a whole, by Pydantic.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from billable_assets.config.models import BillableAssetsConfig

# Profile selected when none is passed explicitly
PROFILE_ENV = "BILLABLE_ASSETS_PROFILE"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "AMMP_DATA_API_KEY": ("data_api", "api_key"),
    "AMMP_DATA_API_URL": ("data_api", "base_url"),
    "AMMP_DATA_API_TIMEOUT": ("data_api", "timeout_seconds"),
}


def read_yaml(path: Path) -> Dict[str, Any]:
    """
    Read a YAML mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the top level is not a mapping
    """
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"{path}: expected a mapping at top level, got {type(data).__name__}"
        )
    return data


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge overlay into a copy of base; nested sections merge key by key."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Builds BillableAssetsConfig from file, profile and environment layers."""

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize config loader.

        Args:
            config_dir: Directory holding relative config files and profiles/
            environ: Environment to read overrides from (default: os.environ)
        """
        self.config_dir = Path(config_dir) if config_dir is not None else Path("config")
        self._environ = os.environ if environ is None else environ

    def load(
        self,
        config_path: Optional[Union[str, Path]] = None,
        profile: Optional[str] = None,
    ) -> BillableAssetsConfig:
        """
        Load and validate the layered configuration.

        Args:
            config_path: Base YAML file, absolute or relative to config_dir.
                         Without one, defaults are the base layer.
            profile: Profile name; falls back to $BILLABLE_ASSETS_PROFILE

        Returns:
            Validated BillableAssetsConfig object

        Raises:
            FileNotFoundError: If the config file or profile doesn't exist
            ValidationError: If the merged config is invalid
        """
        values: Dict[str, Any] = {}
        if config_path is not None:
            values = read_yaml(self._locate(config_path))

        profile = profile or self._environ.get(PROFILE_ENV)
        if profile:
            values = deep_merge(values, self.profile_layer(profile))

        return self.load_from_dict(values)

    def load_from_dict(self, values: Mapping[str, Any]) -> BillableAssetsConfig:
        """Validate a configuration mapping with environment overrides on top."""
        return BillableAssetsConfig.model_validate(deep_merge(values, self.env_layer()))

    def profile_layer(self, profile: str) -> Dict[str, Any]:
        """Read the values of a named profile."""
        path = self.config_dir / "profiles" / f"{profile}.yaml"
        if not path.is_file():
            raise FileNotFoundError(f"Profile not found: {profile} ({path})")
        return read_yaml(path)

    def env_layer(self) -> Dict[str, Any]:
        """Collect the overrides set in the environment."""
        layer: Dict[str, Any] = {}
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = self._environ.get(env_name)
            if value:
                layer.setdefault(section, {})[key] = value
        return layer

    def _locate(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.config_dir / p


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    profile: Optional[str] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> BillableAssetsConfig:
    """
    Load configuration from the process environment.

    Args:
        config_path: Base YAML file
        profile: Optional profile name
        config_dir: Directory for relative paths and profiles

    Returns:
        Validated BillableAssetsConfig object
    """
    return ConfigLoader(config_dir=config_dir).load(config_path, profile)
