"""
Configuration Package - Models and Loaders.

Configuration Structure:
    - BillableAssetsConfig: Root configuration object
    - DataApiConfig: AMMP data API connection settings
    - LoggingConfig: Log level and audit trail rendering

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Layers: base file, profile (<config_dir>/profiles/<name>.yaml), environment
    - Environment variable overrides (AMMP_DATA_API_KEY, AMMP_DATA_API_URL,
      AMMP_DATA_API_TIMEOUT)
"""

from billable_assets.config.loader import ConfigLoader, load_config
from billable_assets.config.models import (
    BillableAssetsConfig,
    DataApiConfig,
    LoggingConfig,
)

__all__ = [
    "BillableAssetsConfig",
    "ConfigLoader",
    "DataApiConfig",
    "LoggingConfig",
    "load_config",
]
