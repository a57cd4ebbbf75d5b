"""
Adapters Package - Infrastructure Implementations.

Concrete implementations of the interfaces package, following the
Hexagonal Architecture (Ports & Adapters) pattern.

Providers:
    - DataApiClient: AMMP data API over aiohttp
    - StaticMembershipProvider: In-memory memberships for development/testing

Loggers:
    - ConsoleAuditLogger: Simple console output
    - StructlogAuditLogger: Structured logging (see observability package)

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - No business logic in adapters
"""

from billable_assets.adapters.console_logger import ConsoleAuditLogger
from billable_assets.adapters.data_api_client import (
    DataApiClient,
    DataApiRequestError,
    create_data_api_client,
)
from billable_assets.adapters.static_provider import StaticMembershipProvider

__all__ = [
    "ConsoleAuditLogger",
    "DataApiClient",
    "DataApiRequestError",
    "StaticMembershipProvider",
    "create_data_api_client",
]
