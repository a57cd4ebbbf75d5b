"""
Integration Tests - End-to-End Contract Scope Tests.

These tests verify that the group filter, the membership providers and
the contract scope resolver work together correctly. The data API is
served by a local aiohttp test server.

Test Files:
    - test_contract_scope.py: Billable scope of contracts end to end
"""
