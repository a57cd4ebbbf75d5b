"""
Billable Assets - Contract Asset Scoping by Asset Group Logic.

Decides which physical assets a billing contract covers by combining
membership in up to three external asset groups:

    (Assets in Primary Group) ∩ (Assets in AND Group) - (Assets in NOT Group)

and aggregates the MW of the result for invoicing. Group lookups fail
closed: if any group cannot be resolved, no assets are billed.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability
    - asyncio fan-out/fan-in for group lookups
    - Configuration-driven behavior via YAML

Main Components:
    - domain: Core entities (AssetRecord, ContractGroupConfig, ...)
    - interfaces: Abstract protocols (MembershipProvider, AuditLogger)
    - filters: GroupFilterEngine
    - capabilities: Capability derivation, MW summary, change detection
    - pipeline: Contract scope orchestration
    - adapters: AMMP data API client, in-memory provider, console logger
    - observability: structlog audit trail
    - config: Configuration models and loaders

Example:
    >>> from billable_assets.adapters import DataApiClient
    >>> from billable_assets.filters import GroupFilterEngine
    >>> async with DataApiClient(config.data_api) as client:
    ...     engine = GroupFilterEngine(client)
    ...     billable = await engine.filter_assets_by_groups(inventory, "grp-1", not_group_id="grp-2")
"""

import logging

from billable_assets.config.models import LoggingConfig
from billable_assets.observability.audit_logger import configure_structlog

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Billable Assets.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import billable_assets
        >>> billable_assets.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("billable_assets").setLevel(level)


def configure_from_config(config: LoggingConfig) -> None:
    """Configure stdlib logging and the structlog audit trail from config."""
    level = logging.getLevelName(config.level)
    configure_logging(level)
    configure_structlog(level, use_json=config.json_output)
