"""
AreaPulse Test Suite.

- unit/: Filter building, executor, parser, classification, client,
  service and agent tool tests
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
"""
