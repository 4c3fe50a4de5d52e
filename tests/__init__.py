"""Test suite for arcbundle.

Test Structure:
- unit/: Unit tests for individual components
  - io/: Real and in-memory filesystem layers
  - bundle/: Hashing, collection, manifest building, validation, verification
  - songlist/: List document models and persistence
  - config/: App config loading
  - cli/: Command-line entry points
- conftest.py: Shared fixtures (active folder layouts)
"""
