"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with in-memory dependencies.
Unit tests should be fast, deterministic, and focused.

Test Files:
    - test_group_filter.py: Primary/AND/NOT filter logic and fail-closed policy
    - test_data_api_client.py: AMMP data API adapter against a local server
    - test_capabilities.py: Capability derivation, MW summary, change detection
    - test_config_loader.py: Configuration loading/validation
"""
