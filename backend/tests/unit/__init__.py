"""
Unit Tests

Unit tests run in isolation without external dependencies.
Stores are in-memory or mocked; nothing touches the filesystem.
"""
