"""
Test Suite for Billable Assets.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: End-to-end tests across filter, provider and pipeline
    - performance/: Benchmarks over large inventories
    - fixtures/: Shared test data and configurations

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest --cov=src/billable_assets        # With coverage
"""
