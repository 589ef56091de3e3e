"""
Test Suite for the Expense Tracker

Test Structure:
- fixtures/: Synthetic expense generators shared by all tests
- unit/: Unit tests mirroring the src/ package structure (core, analysis, export)
- integration/: CLI workflows driven through click's CliRunner

All test data is synthetic; tests never touch a real data directory.
"""
