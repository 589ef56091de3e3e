"""
Test Fixtures and Utilities

Synthetic expense records for unit and integration tests, including the
descriptions (commas, quotes, newlines) that exercise CSV quoting.
"""
